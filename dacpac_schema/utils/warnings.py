"""
Warning system for dacpac parsing.

This module defines the warning collection used for problems that do not
abort a parse: column kinds without an extractor and columns whose data type
had to fall back to SQL_VARIANT. Collected warnings end up on
``SchemaModel.warnings``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

VALID_LEVELS = ("INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class ParseWarning:
    """Warning raised while parsing a model.

    Attributes:
        level: Severity level ("INFO", "WARNING", "ERROR").
        message: Warning text.
        element: Optional fully qualified name of the element concerned.

    Example:
        >>> warning = ParseWarning(
        ...     level="WARNING",
        ...     message="Unsupported column type 'SqlColumnSet'",
        ...     element="[dbo].[T].[Sparse]",
        ... )
        >>> warning.level
        'WARNING'
    """

    level: str
    message: str
    element: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate warning level."""
        if self.level not in VALID_LEVELS:
            raise ValueError(
                f"Invalid warning level: {self.level}. "
                f"Must be one of {list(VALID_LEVELS)}"
            )

    def __str__(self) -> str:
        if self.element:
            return f"[{self.level}] {self.element}: {self.message}"
        return f"[{self.level}] {self.message}"


class WarningCollector:
    """Collects warnings during a single parse.

    Attributes:
        warnings: ParseWarning objects in the order they were added.

    Example:
        >>> collector = WarningCollector()
        >>> collector.add("WARNING", "Unresolved type", "[dbo].[v].[c]")
        >>> collector.has_errors()
        False
        >>> len(collector.get_all())
        1
    """

    def __init__(self) -> None:
        """Initialize a WarningCollector."""
        self.warnings: list[ParseWarning] = []

    def add(self, level: str, message: str, element: Optional[str] = None) -> None:
        """Add a warning.

        Args:
            level: Severity level ("INFO", "WARNING", "ERROR").
            message: Warning text.
            element: Optional name of the element concerned.
        """
        self.warnings.append(ParseWarning(level=level, message=message, element=element))

    def has_errors(self) -> bool:
        return any(warning.level == "ERROR" for warning in self.warnings)

    def get_all(self) -> list[ParseWarning]:
        """Return a copy of all collected warnings."""
        return self.warnings.copy()

    def get_by_level(self, level: str) -> list[ParseWarning]:
        return [warning for warning in self.warnings if warning.level == level]

    def clear(self) -> None:
        self.warnings.clear()

    def add_unsupported_element_warning(self, element_type: str, element_name: str) -> None:
        """Record an element that was skipped because its kind is unknown.

        Args:
            element_type: The element's Type attribute.
            element_name: The element's Name attribute.
        """
        message = (
            f"Unsupported element type '{element_type}'. "
            f"The element was skipped."
        )
        self.add("WARNING", message, element_name)

    def add_unresolved_type_warning(self, column_name: str) -> None:
        """Record a column that fell back to SQL_VARIANT.

        Args:
            column_name: Fully qualified name of the column.
        """
        message = (
            "Unable to resolve the data type; using SQL_VARIANT. "
            "Add an inline annotation such as /* varchar not null */ to the definition."
        )
        self.add("WARNING", message, column_name)

    def get_summary(self) -> dict[str, int]:
        """Return counts of warnings grouped by level."""
        summary: dict[str, int] = {level: 0 for level in VALID_LEVELS}
        for warning in self.warnings:
            summary[warning.level] = summary.get(warning.level, 0) + 1
        return summary
