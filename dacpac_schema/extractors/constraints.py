"""
Key and default constraint extraction.
"""

import xml.etree.ElementTree as ET
from typing import Optional

from dacpac_schema.extractors.context import ExtractionContext
from dacpac_schema.models.column import ConstraintColumn
from dacpac_schema.models.relationship import RefTable, Relationship
from dacpac_schema.models.table import PrimaryKeyConstraint
from dacpac_schema.parser.name_tokenizer import last_segment, split_full_name


def _constraint_column(full_name: str) -> ConstraintColumn:
    return ConstraintColumn(full_name=full_name, name=last_segment(full_name))


def extract_primary_key(
    ctx: ExtractionContext, element: ET.Element
) -> PrimaryKeyConstraint:
    """Extract a SqlPrimaryKeyConstraint element.

    Each entry of ``ColumnSpecifications`` wraps a SqlIndexedColumnSpecification
    whose ``Column`` relationship references the key column.

    Raises:
        XmlStructureError: If ColumnSpecifications is missing.
    """
    relationship = ctx.accessor.require_relationship(element, "ColumnSpecifications")
    columns = []
    for entry in ctx.accessor.all_nodes("x:Entry", relationship):
        reference = ctx.accessor.single_node(
            "x:Element/x:Relationship/x:Entry/x:References", entry
        )
        columns.append(_constraint_column(ctx.accessor.attribute_or_empty("Name", reference)))

    return PrimaryKeyConstraint(
        name=ctx.accessor.attribute_or_empty("Name", element),
        columns=tuple(columns),
    )


def _ref_table(full_name: str, column_names: list[str]) -> RefTable:
    # Foreign keys tolerate odd table names; schema/name are left empty.
    segments = split_full_name(full_name)
    schema, name = segments if len(segments) == 2 else ("", "")
    return RefTable(
        full_name=full_name,
        schema=schema,
        name=name,
        columns=tuple(_constraint_column(column) for column in column_names),
    )


def extract_foreign_key(ctx: ExtractionContext, element: ET.Element) -> Relationship:
    """Extract a SqlForeignKeyConstraint element.

    Raises:
        XmlStructureError: If any of Columns, DefiningTable, ForeignColumns or
            ForeignTable is missing.
    """
    accessor = ctx.accessor
    local_columns = accessor.reference_names(accessor.require_relationship(element, "Columns"))
    local_table = accessor.attribute_or_empty(
        "Name",
        accessor.single_node(
            "x:Entry/x:References", accessor.require_relationship(element, "DefiningTable")
        ),
    )
    foreign_columns = accessor.reference_names(
        accessor.require_relationship(element, "ForeignColumns")
    )
    foreign_table = accessor.attribute_or_empty(
        "Name",
        accessor.single_node(
            "x:Entry/x:References", accessor.require_relationship(element, "ForeignTable")
        ),
    )

    return Relationship(
        name=accessor.attribute_or_empty("Name", element),
        defining_table=_ref_table(local_table, local_columns),
        foreign_table=_ref_table(foreign_table, foreign_columns),
    )


def extract_default_column(ctx: ExtractionContext, element: ET.Element) -> Optional[str]:
    """Return the full name of the column a SqlDefaultConstraint applies to.

    Returns:
        The referenced column path, or None if the constraint has no
        ``ForColumn`` relationship.
    """
    relationship = ctx.accessor.find_relationship(element, "ForColumn")
    if relationship is None:
        return None
    names = ctx.accessor.reference_names(relationship)
    return names[0] if names else None
