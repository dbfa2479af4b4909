"""
Low-level parsing of .dacpac archives and model.xml.

This package contains the archive reader, the namespace-aware XML accessor,
the qualified name tokenizer and the comment annotation parser.
"""

from dacpac_schema.parser.annotations import (
    parse_column_annotation,
    parse_view_annotations,
)
from dacpac_schema.parser.archive import MODEL_ENTRY, extract_model_xml
from dacpac_schema.parser.name_tokenizer import (
    last_segment,
    split_full_name,
    strip_brackets,
)
from dacpac_schema.parser.xml_accessor import DAC_NAMESPACE, XmlPathAccessor

__all__ = [
    "DAC_NAMESPACE",
    "MODEL_ENTRY",
    "XmlPathAccessor",
    "extract_model_xml",
    "last_segment",
    "parse_column_annotation",
    "parse_view_annotations",
    "split_full_name",
    "strip_brackets",
]
