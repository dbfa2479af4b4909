"""
Data models for dacpac schema extraction.

This package contains the immutable records that make up a SchemaModel, the
intermediate view records used during assembly, and the parser configuration.
"""

from dacpac_schema.models.column import UNRESOLVED_TYPE, Column, ConstraintColumn
from dacpac_schema.models.config import ErrorMode, ParserConfig
from dacpac_schema.models.description import DescriptionItem
from dacpac_schema.models.element_type import ColumnType, ElementType
from dacpac_schema.models.relationship import RefTable, Relationship
from dacpac_schema.models.schema_model import SchemaModel
from dacpac_schema.models.stored_proc import StoredProc, StoredProcParam
from dacpac_schema.models.table import PrimaryKeyConstraint, Table
from dacpac_schema.models.view import CommentAnnotation, View, ViewColumn

__all__ = [
    "UNRESOLVED_TYPE",
    "Column",
    "ColumnType",
    "CommentAnnotation",
    "ConstraintColumn",
    "DescriptionItem",
    "ElementType",
    "ErrorMode",
    "ParserConfig",
    "PrimaryKeyConstraint",
    "RefTable",
    "Relationship",
    "SchemaModel",
    "StoredProc",
    "StoredProcParam",
    "Table",
    "View",
    "ViewColumn",
]
