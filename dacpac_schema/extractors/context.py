"""
Shared state for element extraction.
"""

from dataclasses import dataclass, field

from dacpac_schema.exceptions import UnresolvedTypeError, UnsupportedElementError
from dacpac_schema.models.config import ErrorMode, ParserConfig
from dacpac_schema.parser.xml_accessor import XmlPathAccessor
from dacpac_schema.utils.warnings import WarningCollector


@dataclass
class ExtractionContext:
    """Everything an extractor needs besides the element itself.

    Attributes:
        accessor: The parsed model.xml.
        config: Parser configuration.
        collector: Receives non-fatal problems.
    """

    accessor: XmlPathAccessor
    config: ParserConfig = field(default_factory=ParserConfig)
    collector: WarningCollector = field(default_factory=WarningCollector)

    def report_unsupported(self, element_type: str, element_name: str) -> None:
        """Handle an element kind that has no extractor, per config.

        Raises:
            UnsupportedElementError: If on_unsupported_element is FAIL.
        """
        mode = self.config.on_unsupported_element
        if mode == ErrorMode.FAIL:
            raise UnsupportedElementError(
                f"Unsupported element type '{element_type}' for '{element_name}'",
                element_type,
                element_name,
            )
        if mode == ErrorMode.WARN:
            self.collector.add_unsupported_element_warning(element_type, element_name)

    def report_unresolved(self, column_name: str) -> None:
        """Handle a column that fell back to SQL_VARIANT, per config.

        Raises:
            UnresolvedTypeError: If on_unresolved_type is FAIL.
        """
        mode = self.config.on_unresolved_type
        if mode == ErrorMode.FAIL:
            raise UnresolvedTypeError(
                f"Unable to resolve the data type of '{column_name}'", column_name
            )
        if mode == ErrorMode.WARN:
            self.collector.add_unresolved_type_warning(column_name)
