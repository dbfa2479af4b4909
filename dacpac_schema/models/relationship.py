"""
Foreign key relationship models.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from dacpac_schema.models.column import ConstraintColumn


@dataclass(frozen=True)
class RefTable:
    """One side of a foreign key.

    Attributes:
        full_name: Fully qualified table name.
        schema: Schema segment, "" if the name did not have two segments.
        name: Table segment, "" if the name did not have two segments.
        columns: Columns on this side, paired by position with the other side.
    """

    full_name: str
    schema: str
    name: str
    columns: Tuple[ConstraintColumn, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "full_name": self.full_name,
            "schema": self.schema,
            "name": self.name,
            "columns": [column.to_dict() for column in self.columns],
        }


@dataclass(frozen=True)
class Relationship:
    """A foreign key constraint.

    ``defining_table`` owns the constraint; ``foreign_table`` is the table it
    points to. Column ``i`` on one side maps to column ``i`` on the other.

    Attributes:
        name: Constraint name.
        defining_table: The referencing side.
        foreign_table: The referenced side.
    """

    name: str
    defining_table: RefTable
    foreign_table: RefTable

    def column_pairs(self) -> list[tuple[ConstraintColumn, ConstraintColumn]]:
        """Return (local, foreign) column pairs."""
        return list(zip(self.defining_table.columns, self.foreign_table.columns))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "defining_table": self.defining_table.to_dict(),
            "foreign_table": self.foreign_table.to_dict(),
        }
