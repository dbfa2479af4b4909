"""
Stored procedure extraction.
"""

import xml.etree.ElementTree as ET

from dacpac_schema.extractors.context import ExtractionContext
from dacpac_schema.extractors.tables import split_schema_and_name
from dacpac_schema.models.column import UNRESOLVED_TYPE
from dacpac_schema.models.stored_proc import StoredProc, StoredProcParam
from dacpac_schema.parser.name_tokenizer import last_segment, strip_brackets


def extract_parameter(ctx: ExtractionContext, entry: ET.Element) -> StoredProcParam:
    element = ctx.accessor.single_node("x:Element", entry)
    full_name = ctx.accessor.attribute_or_empty("Name", element)

    type_name = ctx.accessor.referenced_type_name(element)
    if type_name is None:
        ctx.report_unresolved(full_name)
        data_type = UNRESOLVED_TYPE
    else:
        data_type = strip_brackets(type_name)

    return StoredProcParam(
        full_name=full_name,
        name=last_segment(full_name),
        data_type=data_type,
        length=None,  # not recorded in a form we can derive it from
        is_output=ctx.accessor.property_value(element, "IsOutput") == "True",
    )


def extract_stored_proc(ctx: ExtractionContext, element: ET.Element) -> StoredProc:
    """Extract a SqlProcedure element.

    Procedures without parameters have no ``Parameters`` relationship.

    Raises:
        NameFormatError: If the procedure name is not [schema].[name].
    """
    full_name = ctx.accessor.attribute_or_empty("Name", element)
    schema, name = split_schema_and_name(full_name, "stored procedure")

    parameters = []
    relationship = ctx.accessor.find_relationship(element, "Parameters")
    if relationship is not None:
        parameters = [
            extract_parameter(ctx, entry)
            for entry in ctx.accessor.all_nodes("x:Entry", relationship)
        ]

    return StoredProc(
        full_name=full_name,
        schema=schema,
        name=name,
        parameters=tuple(parameters),
    )
