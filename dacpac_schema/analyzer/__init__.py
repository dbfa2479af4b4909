"""
Schema assembly for .dacpac models.
"""

from dacpac_schema.analyzer.schema_assembler import (
    SchemaAssembler,
    parse_archive,
    parse_model,
)

__all__ = ["SchemaAssembler", "parse_archive", "parse_model"]
