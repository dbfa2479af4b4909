"""
Element extractors.

One extractor per schema element kind. Each maps a generic model.xml
Element onto a typed record. ``EXTRACTORS`` maps the element kinds that need
nothing but the element itself to their extractor; tables also need the
primary key and default constraint lookups and are extracted separately.
"""

from typing import Any, Callable, Dict

from dacpac_schema.extractors.columns import extract_table_column, extract_view_column
from dacpac_schema.extractors.constraints import (
    extract_default_column,
    extract_foreign_key,
    extract_primary_key,
)
from dacpac_schema.extractors.context import ExtractionContext
from dacpac_schema.extractors.descriptions import extract_description
from dacpac_schema.extractors.procedures import extract_stored_proc
from dacpac_schema.extractors.tables import extract_table
from dacpac_schema.extractors.views import collect_dynamic_columns, extract_view
from dacpac_schema.models.element_type import ElementType

EXTRACTORS: Dict[ElementType, Callable[..., Any]] = {
    ElementType.PRIMARY_KEY: extract_primary_key,
    ElementType.FOREIGN_KEY: extract_foreign_key,
    ElementType.DEFAULT_CONSTRAINT: extract_default_column,
    ElementType.VIEW: extract_view,
    ElementType.PROCEDURE: extract_stored_proc,
    ElementType.EXTENDED_PROPERTY: extract_description,
}

__all__ = [
    "EXTRACTORS",
    "ExtractionContext",
    "collect_dynamic_columns",
    "extract_default_column",
    "extract_description",
    "extract_foreign_key",
    "extract_primary_key",
    "extract_stored_proc",
    "extract_table",
    "extract_table_column",
    "extract_view",
    "extract_view_column",
]
