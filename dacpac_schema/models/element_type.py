"""
Element type enumerations.

The model.xml graph has a single generic node shape; the ``Type`` attribute
decides what an Element means. These enums are the discriminants used to
dispatch extraction.
"""

from enum import Enum
from typing import Optional


class ElementType(Enum):
    """Top-level element kinds the extractors understand."""

    TABLE = "SqlTable"
    VIEW = "SqlView"
    PRIMARY_KEY = "SqlPrimaryKeyConstraint"
    FOREIGN_KEY = "SqlForeignKeyConstraint"
    DEFAULT_CONSTRAINT = "SqlDefaultConstraint"
    PROCEDURE = "SqlProcedure"
    EXTENDED_PROPERTY = "SqlExtendedProperty"

    @classmethod
    def from_attribute(cls, value: Optional[str]) -> Optional["ElementType"]:
        """Map a Type attribute value to an ElementType.

        Args:
            value: Raw Type attribute, may be None.

        Returns:
            The matching ElementType, or None for kinds that are not extracted.
        """
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


class ColumnType(Enum):
    """Table column sub-types."""

    SIMPLE = "SqlSimpleColumn"
    COMPUTED = "SqlComputedColumn"

    @classmethod
    def from_attribute(cls, value: Optional[str]) -> Optional["ColumnType"]:
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return None
