"""
Inline comment annotations.

model.xml does not record the data type of computed columns or of view
columns that do not map straight onto a table column. Authors can supply it
in the SQL itself with a comment right after the expression::

    FullName AS (FirstName + ' ' + LastName /* nvarchar not null */)

    SELECT CAST(x AS int) AS Total /* int null */ FROM ...

This module finds those comments.
"""

import re
from typing import Optional

from dacpac_schema.models.view import CommentAnnotation

COLUMN_ANNOTATION_PATTERN = re.compile(
    r"/\*\s*(?P<data_type>\w*)\s*(?P<nullability>null|not\s+null)?\s*\*/",
    re.IGNORECASE,
)

VIEW_ANNOTATION_PATTERN = re.compile(
    r"\[?(?P<column>\w+)\]?\s*/\*\s*(?P<data_type>\w*)\s*(?P<nullability>null|not\s+null)?\s*\*/",
    re.IGNORECASE,
)


def parse_column_annotation(
    column_name: str, expression: str
) -> Optional[CommentAnnotation]:
    """Find the type annotation in a computed column expression.

    Args:
        column_name: Bare name of the column the expression belongs to.
        expression: The column's defining expression.

    Returns:
        The first annotation found, or None.

    Example:
        >>> parse_column_annotation("Code", "('x' /* varchar not null */)")
        CommentAnnotation(column='Code', data_type='varchar', nullability='not null')
    """
    match = COLUMN_ANNOTATION_PATTERN.search(expression or "")
    if match is None:
        return None
    return CommentAnnotation(
        column=column_name,
        data_type=match.group("data_type"),
        nullability=match.group("nullability"),
    )


def parse_view_annotations(sql: str) -> list[CommentAnnotation]:
    """Find every ``<column> /* type [null|not null] */`` in a view definition.

    Args:
        sql: The view's query script.

    Returns:
        One annotation per occurrence, in text order, keyed by the identifier
        immediately before the comment.
    """
    return [
        CommentAnnotation(
            column=match.group("column"),
            data_type=match.group("data_type"),
            nullability=match.group("nullability"),
        )
        for match in VIEW_ANNOTATION_PATTERN.finditer(sql or "")
    ]


def annotation_allows_nulls(annotation: Optional[CommentAnnotation]) -> bool:
    """Apply the nullability policy for annotated columns.

    No annotation means the column fell back to SQL_VARIANT, which is
    reported as not nullable. An annotation without a null/not null token
    follows SQL Server's default of nullable columns.
    """
    if annotation is None:
        return False
    if annotation.nullability is None:
        return True
    return annotation.nullability.upper() == "NULL"


def annotation_data_type(annotation: CommentAnnotation) -> str:
    """Return the annotated type upper-cased, e.g. "varchar" -> "VARCHAR"."""
    return annotation.data_type.upper()
