"""
Description model.

DescriptionItem holds the text of an MS_Description extended property. The
described object kind is the first name segment, typically SqlTableBase,
SqlView or SqlColumn, but any object kind may carry one (SqlSchema,
SqlSubroutineParameter, SqlConstraint, ...).
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class DescriptionItem:
    """An extended-property description.

    Attributes:
        description_type: Kind of the described object, e.g. "SqlColumn".
        schema: Schema segment.
        table_name: Object name segment, "" for schema-level descriptions.
        column_name: Column segment for column-level descriptions.
        description: The description text.

    Example:
        >>> item = DescriptionItem(
        ...     description_type="SqlColumn",
        ...     schema="dbo",
        ...     table_name="Customer",
        ...     column_name="Name",
        ...     description="Customer display name",
        ... )
        >>> item.is_column_description
        True
    """

    description_type: str
    schema: str
    table_name: str
    column_name: Optional[str]
    description: str

    @property
    def is_column_description(self) -> bool:
        return self.column_name is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "description_type": self.description_type,
            "schema": self.schema,
            "table_name": self.table_name,
            "column_name": self.column_name,
            "description": self.description,
        }
