"""
Table extraction.
"""

import warnings
import xml.etree.ElementTree as ET
from typing import AbstractSet, Dict, List, Mapping, Optional

from dacpac_schema.exceptions import NameFormatError
from dacpac_schema.extractors.columns import extract_table_column
from dacpac_schema.extractors.context import ExtractionContext
from dacpac_schema.models.column import Column
from dacpac_schema.models.table import PrimaryKeyConstraint, Table
from dacpac_schema.parser.name_tokenizer import split_full_name


def split_schema_and_name(full_name: str, kind: str) -> tuple[str, str]:
    """Split a two-part object name into (schema, name).

    Args:
        full_name: Qualified name, e.g. "[dbo].[Customer]".
        kind: Object kind used in the error message ("table", "view", ...).

    Raises:
        NameFormatError: If the name does not have exactly two segments.
    """
    segments = split_full_name(full_name)
    if len(segments) != 2:
        raise NameFormatError(
            f"Unable to parse {kind} '{full_name}': expected [schema].[name]",
            full_name,
            expected_segments=2,
        )
    return segments[0], segments[1]


def index_primary_keys(
    primary_keys: List[PrimaryKeyConstraint],
) -> Dict[str, PrimaryKeyConstraint]:
    """Map every key column's full name to its constraint.

    When two constraints list the same column (malformed input) the first
    one keeps the column and a UserWarning is emitted.
    """
    by_column: Dict[str, PrimaryKeyConstraint] = {}
    for primary_key in primary_keys:
        for column in primary_key.columns:
            existing = by_column.setdefault(column.full_name, primary_key)
            if existing is not primary_key:
                warnings.warn(
                    f"Column '{column.full_name}' belongs to primary keys "
                    f"'{existing.name}' and '{primary_key.name}'. "
                    f"Using '{existing.name}'.",
                    UserWarning,
                )
    return by_column


def find_primary_key(
    columns: List[Column], primary_keys_by_column: Mapping[str, PrimaryKeyConstraint]
) -> Optional[PrimaryKeyConstraint]:
    """Return the constraint of the first column that belongs to a key."""
    for column in columns:
        primary_key = primary_keys_by_column.get(column.full_name)
        if primary_key is not None:
            return primary_key
    return None


def extract_table(
    ctx: ExtractionContext,
    element: ET.Element,
    primary_keys_by_column: Mapping[str, PrimaryKeyConstraint],
    default_columns: AbstractSet[str] = frozenset(),
) -> Table:
    """Extract a SqlTable element.

    Args:
        ctx: Extraction context.
        element: The SqlTable Element.
        primary_keys_by_column: Key constraint per column full name.
        default_columns: Full names of columns with a default constraint.

    Returns:
        The Table with its supported columns in declaration order.

    Raises:
        XmlStructureError: If the table has no Columns relationship.
        NameFormatError: If the table name is not [schema].[name].
    """
    full_name = ctx.accessor.attribute_or_empty("Name", element)
    relationship = ctx.accessor.require_relationship(element, "Columns")
    schema, name = split_schema_and_name(full_name, "table")

    columns = []
    for entry in ctx.accessor.all_nodes("x:Entry", relationship):
        column = extract_table_column(ctx, entry, default_columns)
        if column is not None:
            columns.append(column)

    return Table(
        full_name=full_name,
        schema=schema,
        name=name,
        columns=tuple(columns),
        primary_key=find_primary_key(columns, primary_keys_by_column),
        is_view=False,
    )
