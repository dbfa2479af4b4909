"""
Tests for table, constraint, view, procedure and description extraction.
"""

import pytest

from dacpac_schema.exceptions import NameFormatError, XmlStructureError
from dacpac_schema.extractors import EXTRACTORS
from dacpac_schema.extractors.constraints import (
    extract_default_column,
    extract_foreign_key,
    extract_primary_key,
)
from dacpac_schema.extractors.context import ExtractionContext
from dacpac_schema.extractors.descriptions import extract_description
from dacpac_schema.extractors.procedures import extract_stored_proc
from dacpac_schema.extractors.tables import (
    extract_table,
    index_primary_keys,
    split_schema_and_name,
)
from dacpac_schema.extractors.views import collect_dynamic_columns, extract_view
from dacpac_schema.models.config import ParserConfig
from dacpac_schema.models.element_type import ElementType
from dacpac_schema.parser.xml_accessor import XmlPathAccessor
from xml_builders import (
    default_constraint,
    description,
    dynamic_object,
    foreign_key,
    model_xml,
    parameter,
    primary_key,
    procedure,
    simple_column,
    table,
    view,
    view_column,
)


def context_for(*elements, config=None):
    accessor = XmlPathAccessor(model_xml(*elements))
    return ExtractionContext(accessor=accessor, config=config or ParserConfig())


def first_element(ctx, element_type):
    return next(ctx.accessor.elements_of_type(element_type))


class TestExtractorRegistry:
    """Tests for the element type dispatch table."""

    def test_registered_types(self):
        assert set(EXTRACTORS) == {
            ElementType.PRIMARY_KEY,
            ElementType.FOREIGN_KEY,
            ElementType.DEFAULT_CONSTRAINT,
            ElementType.VIEW,
            ElementType.PROCEDURE,
            ElementType.EXTENDED_PROPERTY,
        }

    def test_element_type_from_attribute(self):
        assert ElementType.from_attribute("SqlTable") == ElementType.TABLE
        assert ElementType.from_attribute("SqlIndex") is None


class TestTableExtraction:
    """Tests for SqlTable extraction."""

    def test_columns_in_order(self):
        ctx = context_for(
            table(
                "[dbo].[Customer]",
                simple_column("[dbo].[Customer].[Id]"),
                simple_column("[dbo].[Customer].[Name]", "[nvarchar]"),
            )
        )
        result = extract_table(ctx, first_element(ctx, "SqlTable"), {})

        assert result.full_name == "[dbo].[Customer]"
        assert result.schema == "dbo"
        assert result.name == "Customer"
        assert [c.name for c in result.columns] == ["Id", "Name"]
        assert result.primary_key is None
        assert result.is_view is False

    def test_primary_key_attached(self):
        ctx = context_for(
            table("[dbo].[Customer]", simple_column("[dbo].[Customer].[Id]")),
            primary_key("[dbo].[PK_Customer]", "[dbo].[Customer]", "[dbo].[Customer].[Id]"),
        )
        key = extract_primary_key(ctx, first_element(ctx, "SqlPrimaryKeyConstraint"))
        result = extract_table(
            ctx, first_element(ctx, "SqlTable"), index_primary_keys([key])
        )

        assert result.primary_key == key
        assert result.primary_key.column_names() == ["Id"]

    def test_missing_columns_relationship(self):
        ctx = context_for('<Element Type="SqlTable" Name="[dbo].[Empty]" />')

        with pytest.raises(XmlStructureError) as exc_info:
            extract_table(ctx, first_element(ctx, "SqlTable"), {})
        assert exc_info.value.element_name == "[dbo].[Empty]"

    def test_bad_name(self):
        ctx = context_for(table("[db].[dbo].[Customer]", simple_column("[x].[y].[z]")))

        with pytest.raises(NameFormatError) as exc_info:
            extract_table(ctx, first_element(ctx, "SqlTable"), {})
        assert exc_info.value.full_name == "[db].[dbo].[Customer]"
        assert exc_info.value.expected_segments == 2

    def test_split_schema_and_name(self):
        assert split_schema_and_name("[sales].[Order]", "table") == ("sales", "Order")
        with pytest.raises(NameFormatError):
            split_schema_and_name("[Order]", "table")


class TestPrimaryKeyIndex:
    """Tests for mapping key columns to constraints."""

    def test_duplicate_column_first_wins(self):
        ctx = context_for(
            primary_key("[dbo].[PK_A]", "[dbo].[T]", "[dbo].[T].[Id]"),
            primary_key("[dbo].[PK_B]", "[dbo].[T]", "[dbo].[T].[Id]"),
        )
        keys = [
            extract_primary_key(ctx, element)
            for element in ctx.accessor.elements_of_type("SqlPrimaryKeyConstraint")
        ]

        with pytest.warns(UserWarning, match="PK_A"):
            by_column = index_primary_keys(keys)
        assert by_column["[dbo].[T].[Id]"].name == "[dbo].[PK_A]"

    def test_composite_key(self):
        ctx = context_for(
            primary_key("[dbo].[PK_Line]", "[dbo].[Line]", "[dbo].[Line].[OrderId]", "[dbo].[Line].[No]")
        )
        key = extract_primary_key(ctx, first_element(ctx, "SqlPrimaryKeyConstraint"))

        assert key.column_names() == ["OrderId", "No"]
        assert set(index_primary_keys([key])) == {"[dbo].[Line].[OrderId]", "[dbo].[Line].[No]"}


class TestForeignKeyExtraction:
    """Tests for SqlForeignKeyConstraint extraction."""

    def test_column_pairs(self):
        ctx = context_for(
            foreign_key(
                "[dbo].[FK_Line_Order]",
                "[dbo].[Line]",
                ["[dbo].[Line].[OrderId]", "[dbo].[Line].[Region]"],
                "[dbo].[Order]",
                ["[dbo].[Order].[Id]", "[dbo].[Order].[Region]"],
            )
        )
        rel = extract_foreign_key(ctx, first_element(ctx, "SqlForeignKeyConstraint"))

        assert rel.name == "[dbo].[FK_Line_Order]"
        assert rel.defining_table.schema == "dbo"
        assert rel.defining_table.name == "Line"
        assert rel.foreign_table.full_name == "[dbo].[Order]"
        assert len(rel.defining_table.columns) == len(rel.foreign_table.columns)
        assert [(a.name, b.name) for a, b in rel.column_pairs()] == [
            ("OrderId", "Id"),
            ("Region", "Region"),
        ]

    def test_odd_table_name_leaves_schema_empty(self):
        ctx = context_for(
            foreign_key("[FK]", "[Line]", ["[Line].[OrderId]"], "[dbo].[Order]", ["[dbo].[Order].[Id]"])
        )
        rel = extract_foreign_key(ctx, first_element(ctx, "SqlForeignKeyConstraint"))

        assert rel.defining_table.full_name == "[Line]"
        assert rel.defining_table.schema == ""
        assert rel.defining_table.name == ""

    def test_missing_foreign_table(self):
        ctx = context_for(
            '<Element Type="SqlForeignKeyConstraint" Name="[dbo].[FK]">'
            '<Relationship Name="Columns"><Entry><References Name="[dbo].[A].[x]" /></Entry></Relationship>'
            "</Element>"
        )
        with pytest.raises(XmlStructureError, match="DefiningTable"):
            extract_foreign_key(ctx, first_element(ctx, "SqlForeignKeyConstraint"))


class TestDefaultConstraint:
    """Tests for SqlDefaultConstraint extraction."""

    def test_for_column(self):
        ctx = context_for(default_constraint("[dbo].[T]", "[dbo].[T].[Created]"))

        assert (
            extract_default_column(ctx, first_element(ctx, "SqlDefaultConstraint"))
            == "[dbo].[T].[Created]"
        )

    def test_without_for_column(self):
        ctx = context_for('<Element Type="SqlDefaultConstraint" />')

        assert extract_default_column(ctx, first_element(ctx, "SqlDefaultConstraint")) is None


class TestProcedureExtraction:
    """Tests for SqlProcedure extraction."""

    def test_parameters(self):
        ctx = context_for(
            procedure(
                "[dbo].[GetCustomer]",
                parameter("[dbo].[GetCustomer].[@Id]", "[int]"),
                parameter("[dbo].[GetCustomer].[@Name]", "[nvarchar]", is_output="True"),
            )
        )
        proc = extract_stored_proc(ctx, first_element(ctx, "SqlProcedure"))

        assert proc.schema == "dbo"
        assert proc.name == "GetCustomer"
        first, second = proc.parameters
        assert first.name == "@Id"
        assert first.data_type == "int"
        assert first.is_output is False
        assert first.length is None
        assert second.data_type == "nvarchar"
        assert second.is_output is True

    def test_no_parameters(self):
        ctx = context_for(procedure("[dbo].[Cleanup]"))

        assert extract_stored_proc(ctx, first_element(ctx, "SqlProcedure")).parameters == ()

    def test_bad_name(self):
        ctx = context_for(procedure("[Cleanup]"))

        with pytest.raises(NameFormatError, match="stored procedure"):
            extract_stored_proc(ctx, first_element(ctx, "SqlProcedure"))


class TestDescriptionExtraction:
    """Tests for MS_Description extended properties."""

    def extract(self, name, text="Some text"):
        ctx = context_for(description(name, text))
        return extract_description(ctx, first_element(ctx, "SqlExtendedProperty"))

    def test_column_description(self):
        item = self.extract("[SqlColumn].[dbo].[Customer].[Name].[MS_Description]", "Full name")

        assert item.description_type == "SqlColumn"
        assert item.schema == "dbo"
        assert item.table_name == "Customer"
        assert item.column_name == "Name"
        assert item.description == "Full name"
        assert item.is_column_description is True

    def test_table_description(self):
        item = self.extract("[SqlTableBase].[dbo].[Customer].[MS_Description]")

        assert item.table_name == "Customer"
        assert item.column_name is None

    def test_schema_description(self):
        item = self.extract("[SqlSchema].[sales].[MS_Description]")

        assert item.schema == "sales"
        assert item.table_name == ""
        assert item.column_name is None

    def test_other_property_ignored(self):
        assert self.extract("[SqlTableBase].[dbo].[Customer].[Owner]") is None

    def test_custom_marker(self):
        ctx = context_for(
            description("[SqlTableBase].[dbo].[Customer].[Caption]", "Customers"),
            config=ParserConfig(description_marker="Caption"),
        )
        item = extract_description(ctx, first_element(ctx, "SqlExtendedProperty"))

        assert item.description == "Customers"

    def test_database_description(self):
        item = self.extract("[SqlDatabaseOptions].[MS_Description]", "Sales database")

        assert item.description_type == "SqlDatabaseOptions"
        assert item.schema == ""
        assert item.table_name == ""
        assert item.column_name is None
        assert item.description == "Sales database"

    def test_no_kind_segment(self):
        with pytest.raises(NameFormatError):
            self.extract("..[MS_Description]")


class TestViewExtraction:
    """Tests for SqlView extraction."""

    def test_columns_and_annotations(self):
        ctx = context_for(
            view(
                "[dbo].[vCustomer]",
                "SELECT Id, UPPER(Name) AS Upper /* nvarchar not null */ FROM dbo.Customer",
                columns=[
                    view_column("[dbo].[vCustomer].[Id]", "[dbo].[Customer].[Id]"),
                    view_column("[dbo].[vCustomer].[Upper]"),
                ],
            )
        )
        result = extract_view(ctx, first_element(ctx, "SqlView"))

        assert result.schema == "dbo"
        assert result.name == "vCustomer"
        assert [c.column_ref_path for c in result.columns] == ["[dbo].[Customer].[Id]", None]
        annotation = result.find_annotation("Upper")
        assert annotation.data_type == "nvarchar"
        assert annotation.nullability == "not null"
        assert result.dynamic_columns == ()

    def test_missing_query_script(self):
        ctx = context_for(
            '<Element Type="SqlView" Name="[dbo].[v]">'
            '<Relationship Name="Columns" /></Element>'
        )
        with pytest.raises(XmlStructureError, match="QueryScript"):
            extract_view(ctx, first_element(ctx, "SqlView"))

    def test_nested_dynamic_columns(self):
        ctx = context_for(
            view(
                "[dbo].[v]",
                "WITH a AS (...) SELECT ...",
                dynamic_objects=[
                    dynamic_object(
                        "[dbo].[v].[a]",
                        columns=[view_column("[dbo].[v].[a].[x]", "[dbo].[T].[x]")],
                        nested=[
                            dynamic_object(
                                "[dbo].[v].[a].[b]",
                                columns=[view_column("[dbo].[v].[a].[b].[y]")],
                            )
                        ],
                    ),
                    dynamic_object(
                        "[dbo].[v].[c]", columns=[view_column("[dbo].[v].[c].[z]")]
                    ),
                ],
            )
        )
        columns = collect_dynamic_columns(ctx, first_element(ctx, "SqlView"))

        assert [c.full_name for c in columns] == [
            "[dbo].[v].[a].[x]",
            "[dbo].[v].[a].[b].[y]",
            "[dbo].[v].[c].[z]",
        ]
        assert ctx.collector.get_all() == []

    def test_depth_cap(self):
        innermost = dynamic_object("[d3]", columns=[view_column("[d3].[c]")])
        middle = dynamic_object("[d2]", columns=[view_column("[d2].[c]")], nested=[innermost])
        outer = dynamic_object("[d1]", columns=[view_column("[d1].[c]")], nested=[middle])
        ctx = context_for(
            view("[dbo].[v]", "SELECT 1", dynamic_objects=[outer]),
            config=ParserConfig(max_dynamic_depth=2),
        )
        columns = collect_dynamic_columns(ctx, first_element(ctx, "SqlView"))

        assert [c.full_name for c in columns] == ["[d1].[c]", "[d2].[c]"]
        warnings = ctx.collector.get_all()
        assert len(warnings) == 1
        assert warnings[0].element == "[dbo].[v]"
