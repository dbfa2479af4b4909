"""
Schema graph module.

This package contains the networkx-based foreign key graph.
"""

from dacpac_schema.graph.schema_graph import SchemaGraph

__all__ = [
    "SchemaGraph",
]
