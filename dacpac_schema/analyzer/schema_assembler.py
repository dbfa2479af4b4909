"""
Schema assembler.

This module defines the SchemaAssembler class, which runs every element
extractor over a parsed model.xml, resolves view columns and produces the
final SchemaModel, and the ``parse_model`` / ``parse_archive`` entry points.
"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from dacpac_schema.extractors import EXTRACTORS
from dacpac_schema.extractors.context import ExtractionContext
from dacpac_schema.extractors.tables import extract_table, index_primary_keys
from dacpac_schema.models.column import UNRESOLVED_TYPE, Column
from dacpac_schema.models.config import ParserConfig
from dacpac_schema.models.element_type import ElementType
from dacpac_schema.models.schema_model import SchemaModel
from dacpac_schema.models.table import Table
from dacpac_schema.models.view import View, ViewColumn
from dacpac_schema.parser.annotations import (
    annotation_allows_nulls,
    annotation_data_type,
)
from dacpac_schema.parser.archive import extract_model_xml
from dacpac_schema.parser.name_tokenizer import last_segment
from dacpac_schema.parser.xml_accessor import XmlPathAccessor
from dacpac_schema.resolver.column_resolver import ColumnReferenceResolver
from dacpac_schema.utils.warnings import WarningCollector

ANNOTATED_VIEW_COLUMN_DESCRIPTION = (
    "This column's data type was resolved from a comment annotation "
    "in the SSDT view definition."
)


class SchemaAssembler:
    """Builds a SchemaModel from a parsed model.xml.

    Workflow:
    1. Bucket every top-level Element by its Type (unknown kinds are ignored)
    2. Extract primary keys and default constraints, build column lookups
    3. Extract tables, views, procedures, foreign keys and descriptions
    4. Resolve view columns against table/view column maps
    5. Convert views to Tables and concatenate them after the base tables

    Usage:
        assembler = SchemaAssembler(config)
        model = assembler.assemble(XmlPathAccessor(xml_text))
    """

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        """Initialize a SchemaAssembler.

        Args:
            config: Parser configuration (uses defaults if None).
        """
        self.config = config or ParserConfig()

    def assemble(self, accessor: XmlPathAccessor) -> SchemaModel:
        """Assemble the schema model of a parsed document.

        Args:
            accessor: The parsed model.xml.

        Returns:
            The SchemaModel.

        Raises:
            XmlStructureError: If a required relationship or property is missing.
            NameFormatError: If a table, view or procedure name is malformed.
            UnsupportedElementError: If configured to fail on unknown column kinds.
            UnresolvedTypeError: If configured to fail on unresolved types.
        """
        ctx = ExtractionContext(
            accessor=accessor, config=self.config, collector=WarningCollector()
        )
        buckets = self._bucket_elements(accessor)

        primary_keys = self._extract_all(ctx, buckets, ElementType.PRIMARY_KEY)
        primary_keys_by_column = index_primary_keys(primary_keys)
        default_columns = {
            column
            for column in self._extract_all(ctx, buckets, ElementType.DEFAULT_CONSTRAINT)
            if column is not None
        }

        tables = [
            extract_table(ctx, element, primary_keys_by_column, default_columns)
            for element in buckets[ElementType.TABLE]
        ]
        views: List[View] = self._extract_all(ctx, buckets, ElementType.VIEW)
        stored_procs = self._extract_all(ctx, buckets, ElementType.PROCEDURE)
        relationships = self._extract_all(ctx, buckets, ElementType.FOREIGN_KEY)
        descriptions = [
            item
            for item in self._extract_all(ctx, buckets, ElementType.EXTENDED_PROPERTY)
            if item is not None
        ]

        resolver = self._build_resolver(tables, views)
        view_tables = [self._view_to_table(ctx, view, resolver) for view in views]

        return SchemaModel(
            tables=tuple(tables + view_tables),
            stored_procs=tuple(stored_procs),
            relationships=tuple(relationships),
            descriptions=tuple(descriptions),
            warnings=tuple(ctx.collector.get_all()),
        )

    @staticmethod
    def _bucket_elements(
        accessor: XmlPathAccessor,
    ) -> Dict[ElementType, List[ET.Element]]:
        buckets: Dict[ElementType, List[ET.Element]] = {kind: [] for kind in ElementType}
        for element in accessor.all_nodes("x:Element", accessor.model):
            kind = ElementType.from_attribute(accessor.attribute("Type", element))
            if kind is not None:
                buckets[kind].append(element)
        return buckets

    @staticmethod
    def _extract_all(
        ctx: ExtractionContext,
        buckets: Dict[ElementType, List[ET.Element]],
        kind: ElementType,
    ) -> List[Any]:
        extractor = EXTRACTORS[kind]
        return [extractor(ctx, element) for element in buckets[kind]]

    def _build_resolver(
        self, tables: List[Table], views: List[View]
    ) -> ColumnReferenceResolver:
        table_columns_by_path: Dict[str, Column] = {
            column.full_name: column for table in tables for column in table.columns
        }
        view_columns_by_path: Dict[str, ViewColumn] = {
            column.full_name: column
            for view in views
            for column in view.columns + view.dynamic_columns
        }
        return ColumnReferenceResolver(
            table_columns_by_path,
            view_columns_by_path,
            max_depth=self.config.max_reference_depth,
        )

    def _view_to_table(
        self, ctx: ExtractionContext, view: View, resolver: ColumnReferenceResolver
    ) -> Table:
        return Table(
            full_name=view.full_name,
            schema=view.schema,
            name=view.name,
            columns=tuple(
                self._view_column_to_column(ctx, view, column, resolver)
                for column in view.columns
            ),
            primary_key=None,
            is_view=True,
        )

    @staticmethod
    def _view_column_to_column(
        ctx: ExtractionContext,
        view: View,
        view_column: ViewColumn,
        resolver: ColumnReferenceResolver,
    ) -> Column:
        """Pick the metadata of one view column.

        A resolved table column is used as is unless the view carries an
        annotation for the column; an annotation overrides it, except when it
        only yields SQL_VARIANT while a resolved column exists.
        """
        name = last_segment(view_column.full_name)
        annotation = view.find_annotation(name)
        resolved = resolver.resolve(view_column)

        if resolved is not None and annotation is None:
            return resolved

        data_type = annotation_data_type(annotation) if annotation else UNRESOLVED_TYPE
        if data_type == UNRESOLVED_TYPE and resolved is not None:
            return resolved

        if annotation is None:
            ctx.report_unresolved(view_column.full_name)
            description = (
                "Unable to resolve this column's data type from the .dacpac file; "
                f"consider adding a type annotation in the view. Ex: {name} /* varchar not null */"
            )
        else:
            description = ANNOTATED_VIEW_COLUMN_DESCRIPTION

        return Column(
            full_name=view_column.full_name,
            name=name,
            description=description,
            data_type=data_type,
            allow_nulls=annotation_allows_nulls(annotation),
            is_identity=False,
            has_default=False,
            is_computed=True,
        )


def parse_model(
    xml_text: Union[str, bytes], config: Optional[ParserConfig] = None
) -> SchemaModel:
    """Parse the text of a model.xml document.

    Args:
        xml_text: Contents of model.xml.
        config: Parser configuration (uses defaults if None).

    Returns:
        The SchemaModel.

    Example:
        >>> model = parse_model(xml_text)
        >>> [table.name for table in model.tables]
        ['Customer', 'Order', 'vCustomerOrders']
    """
    return SchemaAssembler(config).assemble(XmlPathAccessor(xml_text))


def parse_archive(
    dacpac_path: Union[str, Path], config: Optional[ParserConfig] = None
) -> SchemaModel:
    """Read model.xml out of a .dacpac file and parse it.

    Raises:
        ArchiveError: If the archive cannot be read.
    """
    config = config or ParserConfig()
    return parse_model(extract_model_xml(dacpac_path, config.model_entry), config)
