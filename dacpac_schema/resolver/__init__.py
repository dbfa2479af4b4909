"""
Resolver module for view column references.
"""

from dacpac_schema.resolver.column_resolver import ColumnReferenceResolver

__all__ = ["ColumnReferenceResolver"]
