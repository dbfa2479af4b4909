"""
Stored procedure models.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class StoredProcParam:
    """A stored procedure parameter.

    Attributes:
        full_name: Fully qualified parameter name, e.g. "[dbo].[GetOrders].[@Id]".
        name: Last segment of full_name, e.g. "@Id".
        data_type: SQL Server type name without brackets.
        length: Declared length. The model.xml extraction does not derive it,
            so it is always None.
        is_output: Whether the parameter is declared OUTPUT.
    """

    full_name: str
    name: str
    data_type: str
    length: Optional[int] = None
    is_output: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "full_name": self.full_name,
            "name": self.name,
            "data_type": self.data_type,
            "length": self.length,
            "is_output": self.is_output,
        }


@dataclass(frozen=True)
class StoredProc:
    """A stored procedure and its parameters in declaration order."""

    full_name: str
    schema: str
    name: str
    parameters: Tuple[StoredProcParam, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "full_name": self.full_name,
            "schema": self.schema,
            "name": self.name,
            "parameters": [param.to_dict() for param in self.parameters],
        }
