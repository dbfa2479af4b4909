"""
Table model.

This module defines the Table class, the unified representation of both base
tables and views in the extracted schema, and PrimaryKeyConstraint.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from dacpac_schema.models.column import Column, ConstraintColumn


@dataclass(frozen=True)
class PrimaryKeyConstraint:
    """Primary key of a table.

    Attributes:
        name: Constraint name as it appears in the model.
        columns: Key columns in declaration order.
    """

    name: str
    columns: Tuple[ConstraintColumn, ...] = ()

    def column_names(self) -> list[str]:
        return [column.name for column in self.columns]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "columns": [column.to_dict() for column in self.columns],
        }


@dataclass(frozen=True)
class Table:
    """A base table or a view.

    Views are converted into Tables once their columns have been resolved;
    they carry ``is_view=True`` and never a primary key.

    Attributes:
        full_name: Fully qualified name, e.g. "[dbo].[Customer]".
        schema: Schema segment of full_name.
        name: Last segment of full_name.
        columns: Columns in declaration order.
        primary_key: Primary key constraint, if any.
        is_view: Whether this entry was produced from a view.

    Example:
        >>> table = Table(full_name="[dbo].[Customer]", schema="dbo", name="Customer")
        >>> table.get_column("Id") is None
        True
    """

    full_name: str
    schema: str
    name: str
    columns: Tuple[Column, ...] = ()
    primary_key: Optional[PrimaryKeyConstraint] = None
    is_view: bool = False

    def __post_init__(self) -> None:
        """Validate that views carry no primary key."""
        if self.is_view and self.primary_key is not None:
            raise ValueError(f"view '{self.full_name}' cannot have a primary key")

    def get_column(self, name: str) -> Optional[Column]:
        """Get a column by bare name.

        Args:
            name: Column name, e.g. "Id".

        Returns:
            The first column with that name, or None.
        """
        for column in self.columns:
            if column.name == name:
                return column
        return None

    def has_column(self, name: str) -> bool:
        return self.get_column(name) is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "full_name": self.full_name,
            "schema": self.schema,
            "name": self.name,
            "is_view": self.is_view,
            "primary_key": self.primary_key.to_dict() if self.primary_key else None,
            "columns": [column.to_dict() for column in self.columns],
        }
