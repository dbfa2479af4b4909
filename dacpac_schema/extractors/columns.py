"""
Column extraction for tables and views.
"""

import xml.etree.ElementTree as ET
from dataclasses import replace
from typing import AbstractSet, Optional

from dacpac_schema.extractors.context import ExtractionContext
from dacpac_schema.models.column import UNRESOLVED_TYPE, Column
from dacpac_schema.models.element_type import ColumnType
from dacpac_schema.models.view import ViewColumn
from dacpac_schema.parser.annotations import (
    annotation_allows_nulls,
    annotation_data_type,
    parse_column_annotation,
)
from dacpac_schema.parser.name_tokenizer import last_segment, strip_brackets

SIMPLE_COLUMN_DESCRIPTION = "Simple Column"
COMPUTED_COLUMN_DESCRIPTION = "Computed Column"


def extract_table_column(
    ctx: ExtractionContext,
    entry: ET.Element,
    default_columns: AbstractSet[str] = frozenset(),
) -> Optional[Column]:
    """Extract a column from an Entry of a table's ``Columns`` relationship.

    Dispatches on the column element's Type: SqlSimpleColumn and
    SqlComputedColumn are supported; anything else (e.g. SqlColumnSet) is
    reported as unsupported and skipped.

    Args:
        ctx: Extraction context.
        entry: The ``Entry`` node wrapping the column Element.
        default_columns: Full names of columns targeted by a default constraint.

    Returns:
        The Column, or None if the sub-type is not supported.
    """
    element = ctx.accessor.single_node("x:Element", entry)
    raw_type = ctx.accessor.attribute_or_empty("Type", element)
    full_name = ctx.accessor.attribute_or_empty("Name", element)

    column_type = ColumnType.from_attribute(raw_type)
    if column_type == ColumnType.SIMPLE:
        column = _extract_simple_column(ctx, element, full_name)
    elif column_type == ColumnType.COMPUTED:
        column = _extract_computed_column(ctx, element, full_name)
    else:
        ctx.report_unsupported(raw_type, full_name)
        return None

    if full_name in default_columns:
        column = replace(column, has_default=True)
    return column


def _extract_simple_column(
    ctx: ExtractionContext, element: ET.Element, full_name: str
) -> Column:
    # Flags are compared case-sensitively against "True"; absent means default.
    is_nullable = ctx.accessor.property_value(element, "IsNullable")
    is_identity = ctx.accessor.property_value(element, "IsIdentity")

    type_name = ctx.accessor.referenced_type_name(element)
    if type_name is None:
        ctx.report_unresolved(full_name)
        data_type = UNRESOLVED_TYPE
    else:
        data_type = strip_brackets(type_name)

    return Column(
        full_name=full_name,
        name=last_segment(full_name),
        description=SIMPLE_COLUMN_DESCRIPTION,
        data_type=data_type,
        allow_nulls=is_nullable == "True" if is_nullable is not None else True,
        is_identity=is_identity == "True",
        has_default=False,
        is_computed=False,
    )


def _extract_computed_column(
    ctx: ExtractionContext, element: ET.Element, full_name: str
) -> Column:
    name = last_segment(full_name)
    value = ctx.accessor.find_node("x:Property/x:Value", element)
    expression = "".join(value.itertext()) if value is not None else ""

    annotation = parse_column_annotation(name, expression)
    if annotation is not None:
        data_type = annotation_data_type(annotation)
        description = COMPUTED_COLUMN_DESCRIPTION
    else:
        ctx.report_unresolved(full_name)
        data_type = UNRESOLVED_TYPE
        description = (
            f"{COMPUTED_COLUMN_DESCRIPTION}. You can add type annotation to definition "
            f"SQL to get type. E.g. {name} AS ('c' /* varchar not null */)"
        )

    return Column(
        full_name=full_name,
        name=name,
        description=description,
        data_type=data_type,
        allow_nulls=annotation_allows_nulls(annotation),
        is_identity=False,
        has_default=False,
        is_computed=True,
    )


def extract_view_column(ctx: ExtractionContext, entry: ET.Element) -> ViewColumn:
    """Extract a view or dynamic-object column from a ``Columns`` Entry.

    The column's first Relationship (``ExpressionDependencies``) points at
    the column it is read from. Columns computed from expressions may have
    none, in which case column_ref_path is None.
    """
    element = ctx.accessor.single_node("x:Element", entry)
    full_name = ctx.accessor.attribute_or_empty("Name", element)

    column_ref_path = None
    relationship = ctx.accessor.find_node("x:Relationship", element)
    if relationship is not None:
        reference = ctx.accessor.find_node("x:Entry/x:References", relationship)
        if reference is not None:
            column_ref_path = ctx.accessor.attribute("Name", reference)

    return ViewColumn(full_name=full_name, column_ref_path=column_ref_path)
