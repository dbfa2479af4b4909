"""
Column models.

This module defines the Column class, which describes a table or view column
as it appears in the final schema, and ConstraintColumn, a by-name reference
to a column used by keys and relationships.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict

# Data type assigned when neither a reference nor an annotation gives one.
UNRESOLVED_TYPE = "SQL_VARIANT"


@dataclass(frozen=True)
class Column:
    """Represents a column of a table or view.

    Column is immutable; views that inherit metadata from a base table column
    receive a renamed copy (see ``renamed``), never the base column itself.

    Attributes:
        full_name: Fully qualified name, e.g. "[dbo].[Customer].[Id]".
        name: Last segment of full_name, e.g. "Id".
        description: Free text describing where the metadata came from.
        data_type: SQL Server type name without brackets, e.g. "int".
        allow_nulls: Whether the column accepts NULL.
        is_identity: Whether the column is an IDENTITY column.
        has_default: Whether a default constraint targets the column.
        is_computed: Whether the column is computed (or a view column whose
            type came from an annotation or the fallback).

    Example:
        >>> col = Column(
        ...     full_name="[dbo].[Customer].[Id]",
        ...     name="Id",
        ...     description="Simple Column",
        ...     data_type="int",
        ...     allow_nulls=False,
        ... )
        >>> col.renamed("[dbo].[vCustomer].[CustomerId]", "CustomerId").name
        'CustomerId'
    """

    full_name: str
    name: str
    description: str
    data_type: str
    allow_nulls: bool = True
    is_identity: bool = False
    has_default: bool = False
    is_computed: bool = False

    @property
    def is_unresolved(self) -> bool:
        """True when the column carries the SQL_VARIANT fallback type."""
        return self.data_type == UNRESOLVED_TYPE

    def renamed(self, full_name: str, name: str) -> "Column":
        """Return a copy carrying another column's identity.

        Args:
            full_name: Fully qualified name of the new owner.
            name: Bare name of the new owner.

        Returns:
            A Column with the same metadata and the new full_name/name.
        """
        return replace(self, full_name=full_name, name=name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "full_name": self.full_name,
            "name": self.name,
            "description": self.description,
            "data_type": self.data_type,
            "allow_nulls": self.allow_nulls,
            "is_identity": self.is_identity,
            "has_default": self.has_default,
            "is_computed": self.is_computed,
        }


@dataclass(frozen=True)
class ConstraintColumn:
    """Reference to a column from a key or relationship.

    Attributes:
        full_name: Fully qualified column name.
        name: Last segment of full_name.
    """

    full_name: str
    name: str

    def to_dict(self) -> Dict[str, str]:
        return {"full_name": self.full_name, "name": self.name}
