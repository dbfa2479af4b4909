"""
View extraction.

A SqlView element lists its output columns under ``Columns``. Intermediate
query objects (CTEs, derived tables) appear as nested Elements under
``DynamicObjects``, each with its own ``Columns`` and possibly further
``DynamicObjects``. View columns often reference CTE columns, so the
dynamic columns are collected too for reference resolution.
"""

import xml.etree.ElementTree as ET
from typing import List, Tuple

from dacpac_schema.extractors.columns import extract_view_column
from dacpac_schema.extractors.context import ExtractionContext
from dacpac_schema.extractors.tables import split_schema_and_name
from dacpac_schema.models.view import View, ViewColumn
from dacpac_schema.parser.annotations import parse_view_annotations


def _dynamic_objects(ctx: ExtractionContext, element: ET.Element) -> List[ET.Element]:
    relationship = ctx.accessor.find_relationship(element, "DynamicObjects")
    if relationship is None:
        return []
    return ctx.accessor.all_nodes("x:Entry/x:Element", relationship)


def _columns_of(ctx: ExtractionContext, element: ET.Element) -> List[ViewColumn]:
    relationship = ctx.accessor.find_relationship(element, "Columns")
    if relationship is None:
        return []
    return [
        extract_view_column(ctx, entry)
        for entry in ctx.accessor.all_nodes("x:Entry", relationship)
    ]


def collect_dynamic_columns(
    ctx: ExtractionContext, view_element: ET.Element
) -> List[ViewColumn]:
    """Collect the columns of every dynamic object nested in a view.

    The walk is depth first in document order, uses an explicit stack, never
    visits an element twice and stops descending below
    ``config.max_dynamic_depth`` levels.

    Args:
        ctx: Extraction context.
        view_element: The SqlView Element.

    Returns:
        Flattened list of dynamic-object columns.
    """
    max_depth = ctx.config.max_dynamic_depth
    view_name = ctx.accessor.attribute_or_empty("Name", view_element)

    columns: List[ViewColumn] = []
    visited = {id(view_element)}
    stack: List[Tuple[ET.Element, int]] = [
        (child, 1) for child in reversed(_dynamic_objects(ctx, view_element))
    ]
    depth_exceeded = False

    while stack:
        element, depth = stack.pop()
        if id(element) in visited:
            continue
        if depth > max_depth:
            depth_exceeded = True
            continue
        visited.add(id(element))

        columns.extend(_columns_of(ctx, element))
        stack.extend(
            (child, depth + 1) for child in reversed(_dynamic_objects(ctx, element))
        )

    if depth_exceeded:
        ctx.collector.add(
            "WARNING",
            f"Dynamic objects nested deeper than {max_depth} levels were ignored.",
            view_name,
        )
    return columns


def extract_view(ctx: ExtractionContext, element: ET.Element) -> View:
    """Extract a SqlView element.

    Raises:
        XmlStructureError: If the view has no Columns relationship or no
            QueryScript property.
        NameFormatError: If the view name is not [schema].[name].
    """
    accessor = ctx.accessor
    full_name = accessor.attribute_or_empty("Name", element)
    relationship = accessor.require_relationship(element, "Columns")
    columns = [
        extract_view_column(ctx, entry)
        for entry in accessor.all_nodes("x:Entry", relationship)
    ]
    query = accessor.require_property_text(element, "QueryScript")
    schema, name = split_schema_and_name(full_name, "view")

    return View(
        full_name=full_name,
        schema=schema,
        name=name,
        columns=tuple(columns),
        dynamic_columns=tuple(collect_dynamic_columns(ctx, element)),
        annotations=tuple(parse_view_annotations(query)),
    )
