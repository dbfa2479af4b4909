"""
Configuration model for dacpac parsing.

This module defines the ParserConfig class and ErrorMode enum, which control
how the parser reacts to elements it cannot fully interpret and how deep it
is allowed to follow nested structures.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorMode(str, Enum):
    """Enumeration of error handling modes for non-fatal parse problems.

    Attributes:
        FAIL: Raise an exception immediately.
        WARN: Record a ParseWarning and continue.
        IGNORE: Continue without recording anything.

    Example:
        >>> ErrorMode.values()
        ['fail', 'warn', 'ignore']
    """

    FAIL = "fail"
    WARN = "warn"
    IGNORE = "ignore"

    @classmethod
    def values(cls) -> list[str]:
        """Return a list of all possible error mode values."""
        return [member.value for member in cls]


@dataclass
class ParserConfig:
    """Configuration settings for dacpac parsing.

    The defaults reproduce the behaviour expected by schema consumers: an
    unknown column kind is skipped, and a column whose type cannot be found
    falls back to SQL_VARIANT. Both are recorded as warnings.

    Attributes:
        on_unsupported_element: What to do with a column sub-type that has no
            extractor. Defaults to ErrorMode.WARN.
        on_unresolved_type: What to do when a computed or view column's type
            can be found neither through references nor through a comment
            annotation. Defaults to ErrorMode.WARN.
        max_dynamic_depth: Maximum nesting of DynamicObjects (CTEs) walked
            inside a single view.
        max_reference_depth: Maximum number of hops followed when resolving
            a view column reference.
        model_entry: Name of the XML entry inside the .dacpac archive.
        description_marker: Extended property name that holds descriptions.

    Example:
        >>> config = ParserConfig(on_unresolved_type=ErrorMode.FAIL)
        >>> config.on_unsupported_element
        <ErrorMode.WARN: 'warn'>
    """

    on_unsupported_element: ErrorMode = ErrorMode.WARN
    on_unresolved_type: ErrorMode = ErrorMode.WARN
    max_dynamic_depth: int = 100
    max_reference_depth: int = 100
    model_entry: str = "model.xml"
    description_marker: str = "MS_Description"

    def __post_init__(self) -> None:
        """Validate configuration settings."""
        if not isinstance(self.on_unsupported_element, ErrorMode):
            raise TypeError("on_unsupported_element must be an ErrorMode instance")
        if not isinstance(self.on_unresolved_type, ErrorMode):
            raise TypeError("on_unresolved_type must be an ErrorMode instance")
        if not isinstance(self.max_dynamic_depth, int) or self.max_dynamic_depth < 1:
            raise ValueError("max_dynamic_depth must be a positive integer")
        if not isinstance(self.max_reference_depth, int) or self.max_reference_depth < 1:
            raise ValueError("max_reference_depth must be a positive integer")
        if not self.model_entry:
            raise ValueError("model_entry cannot be empty")
        if not self.description_marker:
            raise ValueError("description_marker cannot be empty")

    @classmethod
    def strict(cls) -> "ParserConfig":
        """Return a configuration that fails on every non-fatal problem."""
        return cls(
            on_unsupported_element=ErrorMode.FAIL,
            on_unresolved_type=ErrorMode.FAIL,
        )
