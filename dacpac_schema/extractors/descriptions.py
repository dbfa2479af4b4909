"""
MS_Description extraction.

Descriptions are SqlExtendedProperty elements whose name is the described
object's name followed by the property name, e.g.::

    [SqlColumn].[dbo].[Customer].[Name].[MS_Description]
    [SqlTableBase].[dbo].[Customer].[MS_Description]
    [SqlSchema].[sales].[MS_Description]
"""

import xml.etree.ElementTree as ET
from typing import Optional

from dacpac_schema.exceptions import NameFormatError
from dacpac_schema.extractors.context import ExtractionContext
from dacpac_schema.models.description import DescriptionItem
from dacpac_schema.parser.name_tokenizer import split_full_name

TABLE_LEVEL_KIND = "SqlTableBase"


def is_description_property(full_name: str, marker: str) -> bool:
    """Return True if an extended property name ends in ``.[<marker>]``."""
    return full_name.endswith(f".[{marker}]")


def extract_description(
    ctx: ExtractionContext, element: ET.Element
) -> Optional[DescriptionItem]:
    """Extract a description from a SqlExtendedProperty element.

    Returns:
        The DescriptionItem, or None if the property is not a description.

    Raises:
        NameFormatError: If the name has no segment before the marker.
        XmlStructureError: If the property has no Value.
    """
    marker = ctx.config.description_marker
    full_name = ctx.accessor.attribute_or_empty("Name", element)
    if not is_description_property(full_name, marker):
        return None

    segments = split_full_name(full_name)
    if len(segments) < 2:
        raise NameFormatError(
            f"Unable to parse description '{full_name}': expected [kind].[{marker}]",
            full_name,
            expected_segments=2,
        )

    kind = segments[0]
    # [SqlDatabaseOptions].[MS_Description] describes the database: no schema.
    schema = segments[1] if segments[1] != marker else ""
    # [SqlSchema].[sales].[MS_Description]: table_name is "", not the marker.
    table_name = segments[2] if len(segments) > 2 and segments[2] != marker else ""
    column_name = None
    if len(segments) > 3 and kind != TABLE_LEVEL_KIND and segments[3] != marker:
        column_name = segments[3]

    return DescriptionItem(
        description_type=kind,
        schema=schema,
        table_name=table_name,
        column_name=column_name,
        description=ctx.accessor.require_property_text(element, "Value"),
    )
