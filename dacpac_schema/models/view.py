"""
Intermediate view models.

These records only exist while a model is being assembled: a View keeps the
raw column reference paths until the ColumnReferenceResolver has turned them
into Columns, at which point the view becomes a Table.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class CommentAnnotation:
    """Inline ``/* type [null|not null] */`` annotation.

    Attributes:
        column: Column name the annotation belongs to.
        data_type: Type word as written, e.g. "varchar".
        nullability: "null" / "not null" as written, or None when absent.
            None means "not specified", not "not nullable".
    """

    column: str
    data_type: str
    nullability: Optional[str] = None


@dataclass(frozen=True)
class ViewColumn:
    """A view (or dynamic object) column before resolution.

    Attributes:
        full_name: Fully qualified column name.
        column_ref_path: Fully qualified name of the column this one reads
            from: a table column, another view column or a CTE column.
    """

    full_name: str
    column_ref_path: Optional[str] = None

    @property
    def is_self_reference(self) -> bool:
        return self.column_ref_path == self.full_name


@dataclass(frozen=True)
class View:
    """A view as extracted from model.xml.

    Attributes:
        full_name: Fully qualified view name.
        schema: Schema segment.
        name: View name segment.
        columns: Output columns of the view.
        dynamic_columns: Columns of nested dynamic objects (CTEs, derived
            tables), flattened.
        annotations: Annotations found in the view's query script.
    """

    full_name: str
    schema: str
    name: str
    columns: Tuple[ViewColumn, ...] = ()
    dynamic_columns: Tuple[ViewColumn, ...] = ()
    annotations: Tuple[CommentAnnotation, ...] = ()

    def find_annotation(self, column_name: str) -> Optional[CommentAnnotation]:
        """Return the first annotation written for ``column_name``."""
        for annotation in self.annotations:
            if annotation.column == column_name:
                return annotation
        return None
