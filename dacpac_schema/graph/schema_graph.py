"""
Foreign key graph for an extracted schema.

This module defines the SchemaGraph class, which uses networkx to build a
directed graph of tables connected by their foreign keys and answers
questions such as "which tables does this one depend on" or "in which order
can these tables be loaded".
"""

from __future__ import annotations

from typing import Any

import networkx as nx

from dacpac_schema.exceptions import SchemaGraphError
from dacpac_schema.models.schema_model import SchemaModel


class SchemaGraph:
    """Directed foreign key graph.

    Nodes are table and view full names; an edge ``A -> B`` means a foreign
    key defined on A references B. Edges carry the constraint name and the
    paired column names.

    Attributes:
        graph: networkx DiGraph holding the tables and foreign keys.

    Example:
        >>> graph = SchemaGraph.from_model(model)
        >>> graph.referenced_tables("[dbo].[OrderLine]")
        {'[dbo].[Order]', '[dbo].[Customer]'}
    """

    def __init__(self) -> None:
        """Initialize an empty SchemaGraph."""
        self.graph = nx.DiGraph()

    @classmethod
    def from_model(cls, model: SchemaModel) -> "SchemaGraph":
        """Build the graph of every table, view and foreign key in a model."""
        schema_graph = cls()
        for table in model.tables:
            schema_graph.graph.add_node(
                table.full_name,
                schema=table.schema,
                name=table.name,
                is_view=table.is_view,
            )
        for relationship in model.relationships:
            source = relationship.defining_table.full_name
            target = relationship.foreign_table.full_name
            # Foreign keys may point at tables outside the model.
            for node in (source, target):
                if node not in schema_graph.graph:
                    schema_graph.graph.add_node(node, external=True)
            schema_graph.graph.add_edge(
                source,
                target,
                name=relationship.name,
                columns=[
                    (local.name, foreign.name)
                    for local, foreign in relationship.column_pairs()
                ],
            )
        return schema_graph

    def referenced_tables(self, full_name: str) -> set[str]:
        """Return every table reachable through foreign keys from ``full_name``."""
        if full_name not in self.graph:
            return set()
        return nx.descendants(self.graph, full_name) - {full_name}

    def referencing_tables(self, full_name: str) -> set[str]:
        """Return every table whose foreign keys lead (transitively) to ``full_name``."""
        if full_name not in self.graph:
            return set()
        return nx.ancestors(self.graph, full_name) - {full_name}

    def dependency_order(self) -> list[str]:
        """Order tables so that referenced tables come before referencing ones.

        Self-referencing foreign keys (e.g. Employee.ManagerId) are ignored.

        Returns:
            Table full names in load order.

        Raises:
            SchemaGraphError: If foreign keys form a cycle between tables.
        """
        acyclic = self.graph.copy()
        acyclic.remove_edges_from(list(nx.selfloop_edges(acyclic)))
        try:
            order = list(nx.topological_sort(acyclic))
        except nx.NetworkXUnfeasible as e:
            cycle = [u for u, _ in nx.find_cycle(acyclic)]
            raise SchemaGraphError(
                f"Foreign keys form a cycle: {' -> '.join(cycle)}", cycle
            ) from e
        order.reverse()
        return order

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        """Export graph to dictionary format."""
        return {
            "nodes": [
                {
                    "id": node,
                    "schema": data.get("schema"),
                    "name": data.get("name"),
                    "is_view": data.get("is_view", False),
                    "external": data.get("external", False),
                }
                for node, data in self.graph.nodes(data=True)
            ],
            "edges": [
                {
                    "source": u,
                    "target": v,
                    "name": data.get("name"),
                    "columns": data.get("columns", []),
                }
                for u, v, data in self.graph.edges(data=True)
            ],
        }

    def get_statistics(self) -> dict[str, int]:
        """Return node/edge counts and the number of isolated tables."""
        return {
            "total_nodes": self.graph.number_of_nodes(),
            "total_edges": self.graph.number_of_edges(),
            "isolated_nodes": nx.number_of_isolates(self.graph),
            "self_references": nx.number_of_selfloops(self.graph),
        }
