"""
View column reference resolver.

This module defines the ColumnReferenceResolver class, which finds the base
table column a view column ultimately reads from, following references
through other views and CTE columns.
"""

from enum import Enum
from typing import Dict, List, Mapping, Optional, Union

from dacpac_schema.models.column import Column
from dacpac_schema.models.view import ViewColumn
from dacpac_schema.parser.name_tokenizer import last_segment


class _PathState(Enum):
    """Arena markers for paths that do not map to a table column (yet)."""

    IN_PROGRESS = "in_progress"
    UNRESOLVED = "unresolved"


_Slot = Union[Column, _PathState]


class ColumnReferenceResolver:
    """Resolves view columns to the table columns they read from.

    A reference path is looked up first among table columns, then among view
    and dynamic-object columns. A table hit ends the walk; a view hit whose
    own reference differs from the current path continues the walk from that
    reference; anything else (no hit, a column that references itself, a
    column without a reference) leaves the column unresolved.

    Core algorithm: iterative walk + arena of per-path states. Every path
    visited is recorded IN_PROGRESS while the walk is running and replaced by
    its outcome afterwards, so cycles of any length terminate and shared
    chains are only walked once.

    Usage:
        resolver = ColumnReferenceResolver(table_columns, view_columns)
        column = resolver.resolve(view_column)
        if column is None:
            ...  # fall back to annotations
    """

    def __init__(
        self,
        table_columns_by_path: Mapping[str, Column],
        view_columns_by_path: Mapping[str, ViewColumn],
        max_depth: int = 100,
    ) -> None:
        """Initialize a ColumnReferenceResolver.

        Args:
            table_columns_by_path: Base table columns keyed by full name.
            view_columns_by_path: View and dynamic-object columns keyed by
                full name.
            max_depth: Maximum number of references followed in one walk.
        """
        self.table_columns_by_path = table_columns_by_path
        self.view_columns_by_path = view_columns_by_path
        self.max_depth = max_depth
        self._arena: Dict[str, _Slot] = {}

    def resolve(self, view_column: ViewColumn) -> Optional[Column]:
        """Resolve a view column to a table column carrying its identity.

        Args:
            view_column: The column to resolve.

        Returns:
            A copy of the source table column renamed to the view column's
            full_name/name, or None if the reference cannot be resolved.
        """
        if view_column.column_ref_path is None:
            return None
        source = self.resolve_path(view_column.column_ref_path)
        if source is None:
            return None
        return source.renamed(view_column.full_name, last_segment(view_column.full_name))

    def resolve_path(self, path: str) -> Optional[Column]:
        """Return the table column a reference path leads to, or None."""
        slot = self._arena.get(path)
        if isinstance(slot, Column):
            return slot
        if slot is not None:
            return None

        chain: List[str] = []
        result: Optional[Column] = None
        current: Optional[str] = path
        truncated = False

        while current is not None:
            slot = self._arena.get(current)
            if isinstance(slot, Column):
                result = slot
                break
            if slot is not None:
                # Known dead end, or a path already on this chain (cycle).
                break

            table_column = self.table_columns_by_path.get(current)
            if table_column is not None:
                self._arena[current] = table_column
                result = table_column
                break

            if len(chain) >= self.max_depth:
                truncated = True
                break
            self._arena[current] = _PathState.IN_PROGRESS
            chain.append(current)

            view_column = self.view_columns_by_path.get(current)
            if view_column is None or view_column.is_self_reference:
                break
            current = view_column.column_ref_path

        if truncated:
            # Walk cut short by max_depth; do not memoize a partial outcome.
            for visited in chain:
                del self._arena[visited]
            return None

        for visited in chain:
            self._arena[visited] = result if result is not None else _PathState.UNRESOLVED
        return result

    def clear(self) -> None:
        """Forget all memoized outcomes."""
        self._arena.clear()
