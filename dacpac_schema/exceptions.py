"""
Custom exception classes for dacpac schema extraction.

This module defines all custom exceptions used throughout the dacpac_schema
package. Structural failures (unreadable archive, malformed XML, bad names)
abort a parse; UnsupportedElementError and UnresolvedTypeError are only raised
when the parser is configured with ErrorMode.FAIL for them.
"""

from typing import Optional


class DacpacSchemaError(Exception):
    """Base exception class for all dacpac schema errors.

    Attributes:
        message: Human-readable error message describing the error.
    """

    def __init__(self, message: str) -> None:
        """Initialize a DacpacSchemaError with a message.

        Args:
            message: Error message describing what went wrong.
        """
        self.message = message
        super().__init__(self.message)


class ArchiveError(DacpacSchemaError):
    """Exception raised when the .dacpac archive cannot be read.

    Raised when the file does not exist, is not a zip archive, does not
    contain the model entry, or the entry is not UTF-8 text.

    Attributes:
        message: Error message.
        path: Path of the archive.
        entry: Name of the archive entry that was being read.
    """

    def __init__(
        self, message: str, path: str, entry: Optional[str] = None
    ) -> None:
        """Initialize an ArchiveError.

        Args:
            message: Error message.
            path: Path of the archive.
            entry: Optional name of the entry being read.
        """
        self.path = path
        self.entry = entry
        super().__init__(message)


class XmlStructureError(DacpacSchemaError):
    """Exception raised when model.xml does not have the expected shape.

    This covers documents that are not well formed, documents in a foreign
    namespace, and elements missing a relationship or property the format
    always carries (e.g. a table without a ``Columns`` relationship).

    Attributes:
        message: Error message.
        element_name: Name attribute of the offending element, if known.
    """

    def __init__(self, message: str, element_name: Optional[str] = None) -> None:
        """Initialize an XmlStructureError.

        Args:
            message: Error message.
            element_name: Optional name of the offending element.
        """
        self.element_name = element_name
        if element_name:
            message = f"{message} (element '{element_name}')"
        super().__init__(message)


class NameFormatError(DacpacSchemaError):
    """Exception raised when a qualified name has the wrong number of segments.

    Attributes:
        message: Error message.
        full_name: The qualified name as it appears in the model.
        expected_segments: Segment count required in this context.
    """

    def __init__(self, message: str, full_name: str, expected_segments: int) -> None:
        self.full_name = full_name
        self.expected_segments = expected_segments
        super().__init__(message)


class UnsupportedElementError(DacpacSchemaError):
    """Exception raised for an element sub-type the extractors do not know.

    Only raised when ``ParserConfig.on_unsupported_element`` is FAIL.
    Otherwise the element is skipped and a warning is recorded.

    Attributes:
        message: Error message.
        element_type: Value of the element's Type attribute.
        element_name: Value of the element's Name attribute.
    """

    def __init__(self, message: str, element_type: str, element_name: str) -> None:
        self.element_type = element_type
        self.element_name = element_name
        super().__init__(message)


class UnresolvedTypeError(DacpacSchemaError):
    """Exception raised when a column's data type cannot be determined.

    Only raised when ``ParserConfig.on_unresolved_type`` is FAIL. Otherwise
    the column gets the SQL_VARIANT marker type and a warning is recorded.

    Attributes:
        message: Error message.
        column_name: Fully qualified name of the column.
    """

    def __init__(self, message: str, column_name: str) -> None:
        self.column_name = column_name
        super().__init__(message)


class SchemaGraphError(DacpacSchemaError):
    """Exception raised when the foreign key graph cannot be ordered.

    Attributes:
        message: Error message.
        cycle: Table names forming the cycle, if known.
    """

    def __init__(self, message: str, cycle: Optional[list[str]] = None) -> None:
        self.cycle = cycle or []
        super().__init__(message)
