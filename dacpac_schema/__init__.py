"""
dacpac-schema v1.0

Extracts tables, views, columns, keys, stored procedures and descriptions
from SQL Server Data Tools .dacpac packages.

Example:
    >>> from dacpac_schema import parse_archive
    >>> model = parse_archive("AdventureWorks.dacpac")
    >>> customer = model.try_get_table_by_name("Customer")
    >>> [column.name for column in customer.columns]
"""

from dacpac_schema.version import __version__, __version_info__

__author__ = "dacpac-schema Contributors"

from dacpac_schema.analyzer.schema_assembler import (
    SchemaAssembler,
    parse_archive,
    parse_model,
)
from dacpac_schema.exceptions import (
    ArchiveError,
    DacpacSchemaError,
    NameFormatError,
    SchemaGraphError,
    UnresolvedTypeError,
    UnsupportedElementError,
    XmlStructureError,
)
from dacpac_schema.graph.schema_graph import SchemaGraph
from dacpac_schema.models.column import UNRESOLVED_TYPE, Column, ConstraintColumn
from dacpac_schema.models.config import ErrorMode, ParserConfig
from dacpac_schema.models.description import DescriptionItem
from dacpac_schema.models.relationship import RefTable, Relationship
from dacpac_schema.models.schema_model import SchemaModel
from dacpac_schema.models.stored_proc import StoredProc, StoredProcParam
from dacpac_schema.models.table import PrimaryKeyConstraint, Table
from dacpac_schema.parser.archive import extract_model_xml
from dacpac_schema.resolver.column_resolver import ColumnReferenceResolver
from dacpac_schema.utils.warnings import ParseWarning, WarningCollector

__all__ = [
    # Version info
    "__version__",
    "__version_info__",
    # Entry points
    "parse_model",
    "parse_archive",
    "extract_model_xml",
    "SchemaAssembler",
    # Configuration
    "ParserConfig",
    "ErrorMode",
    # Data models
    "SchemaModel",
    "Table",
    "Column",
    "ConstraintColumn",
    "PrimaryKeyConstraint",
    "Relationship",
    "RefTable",
    "StoredProc",
    "StoredProcParam",
    "DescriptionItem",
    "UNRESOLVED_TYPE",
    # Resolution and graph
    "ColumnReferenceResolver",
    "SchemaGraph",
    # Warnings
    "ParseWarning",
    "WarningCollector",
    # Exceptions
    "DacpacSchemaError",
    "ArchiveError",
    "XmlStructureError",
    "NameFormatError",
    "UnsupportedElementError",
    "UnresolvedTypeError",
    "SchemaGraphError",
]
