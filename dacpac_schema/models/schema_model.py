"""
Schema model.

This module defines SchemaModel, the immutable result of parsing one
model.xml document.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from dacpac_schema.models.description import DescriptionItem
from dacpac_schema.models.relationship import Relationship
from dacpac_schema.models.stored_proc import StoredProc
from dacpac_schema.models.table import Table
from dacpac_schema.utils.warnings import ParseWarning


@dataclass(frozen=True)
class SchemaModel:
    """Everything extracted from a .dacpac model.

    Tables come first in document order, followed by the views converted to
    tables. Two models parsed from the same XML compare equal; warnings are
    informational and do not take part in equality.

    Attributes:
        tables: Base tables followed by views.
        stored_procs: Stored procedures.
        relationships: Foreign keys.
        descriptions: MS_Description extended properties.
        warnings: Non-fatal problems met while parsing.

    Example:
        >>> model = parse_model(xml_text)
        >>> customer = model.try_get_table_by_name("Customer")
        >>> customer.primary_key.column_names()
        ['Id']
    """

    tables: Tuple[Table, ...] = ()
    stored_procs: Tuple[StoredProc, ...] = ()
    relationships: Tuple[Relationship, ...] = ()
    descriptions: Tuple[DescriptionItem, ...] = ()
    warnings: Tuple[ParseWarning, ...] = field(default=(), compare=False)
    _tables_by_name: Dict[str, Table] = field(
        default_factory=dict, init=False, repr=False, compare=False, hash=False
    )
    _tables_by_full_name: Dict[str, Table] = field(
        default_factory=dict, init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self) -> None:
        """Build the name lookups; the first table with a given name wins."""
        for table in self.tables:
            self._tables_by_name.setdefault(table.name, table)
            self._tables_by_full_name.setdefault(table.full_name, table)

    def try_get_table_by_name(self, name: str) -> Optional[Table]:
        """Find a table or view by bare name.

        Args:
            name: Bare table name, e.g. "Customer" (not "[dbo].[Customer]").

        Returns:
            The first table with that name, or None.
        """
        return self._tables_by_name.get(name)

    def get_table(self, full_name: str) -> Optional[Table]:
        """Find a table or view by fully qualified name."""
        return self._tables_by_full_name.get(full_name)

    @property
    def base_tables(self) -> list[Table]:
        return [table for table in self.tables if not table.is_view]

    @property
    def views(self) -> list[Table]:
        return [table for table in self.tables if table.is_view]

    def get_description(
        self, schema: str, table_name: str, column_name: Optional[str] = None
    ) -> Optional[str]:
        """Return the description of a table/view or one of its columns.

        Args:
            schema: Schema name.
            table_name: Table or view name.
            column_name: Column name, or None for the object itself.

        Returns:
            The description text, or None if there is none.
        """
        for item in self.descriptions:
            if (
                item.schema == schema
                and item.table_name == table_name
                and item.column_name == column_name
            ):
                return item.description
        return None

    def relationships_for(self, full_name: str) -> list[Relationship]:
        """Return the foreign keys defined on or pointing to a table."""
        return [
            rel
            for rel in self.relationships
            if full_name in (rel.defining_table.full_name, rel.foreign_table.full_name)
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (for serialization)."""
        return {
            "tables": [table.to_dict() for table in self.tables],
            "stored_procs": [proc.to_dict() for proc in self.stored_procs],
            "relationships": [rel.to_dict() for rel in self.relationships],
            "descriptions": [item.to_dict() for item in self.descriptions],
            "warnings": [str(warning) for warning in self.warnings],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
