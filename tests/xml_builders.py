"""
Builders for model.xml test documents.

Each helper returns an XML fragment shaped like the corresponding node of a
real .dacpac model.xml.
"""

from xml.sax.saxutils import quoteattr

DAC_NAMESPACE = "http://schemas.microsoft.com/sqlserver/dac/Serialization/2012/02"


def model_xml(*elements: str, namespace: str = DAC_NAMESPACE) -> str:
    body = "\n".join(elements)
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        f'<DataSchemaModel FileFormatVersion="1.2" SchemaVersion="2.9" '
        f'DspName="Microsoft.Data.Tools.Schema.Sql.Sql130DatabaseSchemaProvider" '
        f'CollationLcid="1033" CollationCaseSensitive="False" xmlns="{namespace}">\n'
        f"<Model>\n{body}\n</Model>\n"
        "</DataSchemaModel>"
    )


def _entries(items) -> str:
    return "".join(f"<Entry>{item}</Entry>" for item in items)


def _references(name: str) -> str:
    return f"<References Name={quoteattr(name)} />"


def relationship(name: str, *items: str) -> str:
    return f'<Relationship Name="{name}">{_entries(items)}</Relationship>'


def reference_relationship(name: str, *targets: str) -> str:
    return relationship(name, *(_references(target) for target in targets))


def type_specifier(type_name: str) -> str:
    return relationship(
        "TypeSpecifier",
        '<Element Type="SqlTypeSpecifier">'
        + relationship(
            "Type", f'<References ExternalSource="BuiltIns" Name={quoteattr(type_name)} />'
        )
        + "</Element>",
    )


def prop(name: str, value: str) -> str:
    return f'<Property Name="{name}" Value={quoteattr(value)} />'


def script_prop(name: str, text: str) -> str:
    return f'<Property Name="{name}"><Value><![CDATA[{text}]]></Value></Property>'


def simple_column(full_name, type_name="[int]", nullable=None, identity=None) -> str:
    props = ""
    if nullable is not None:
        props += prop("IsNullable", nullable)
    if identity is not None:
        props += prop("IsIdentity", identity)
    type_part = type_specifier(type_name) if type_name is not None else ""
    return (
        f'<Element Type="SqlSimpleColumn" Name={quoteattr(full_name)}>'
        f"{props}{type_part}</Element>"
    )


def computed_column(full_name: str, expression: str) -> str:
    return (
        f'<Element Type="SqlComputedColumn" Name={quoteattr(full_name)}>'
        f'{script_prop("ExpressionScript", expression)}'
        f"{reference_relationship('ExpressionDependencies', '[dbo].[Other].[Col]')}"
        "</Element>"
    )


def column_of_type(element_type: str, full_name: str) -> str:
    return f'<Element Type="{element_type}" Name={quoteattr(full_name)} />'


def table(full_name: str, *columns: str) -> str:
    return (
        f'<Element Type="SqlTable" Name={quoteattr(full_name)}>'
        f'{prop("IsAnsiNullsOn", "True")}'
        f"{relationship('Columns', *columns)}"
        f"{reference_relationship('Schema', '[dbo]')}"
        "</Element>"
    )


def primary_key(name: str, table_name: str, *column_names: str) -> str:
    specifications = [
        '<Element Type="SqlIndexedColumnSpecification">'
        + reference_relationship("Column", column)
        + "</Element>"
        for column in column_names
    ]
    return (
        f'<Element Type="SqlPrimaryKeyConstraint" Name={quoteattr(name)}>'
        f"{relationship('ColumnSpecifications', *specifications)}"
        f"{reference_relationship('DefiningTable', table_name)}"
        "</Element>"
    )


def foreign_key(name, table_name, columns, foreign_table, foreign_columns) -> str:
    return (
        f'<Element Type="SqlForeignKeyConstraint" Name={quoteattr(name)}>'
        f"{reference_relationship('Columns', *columns)}"
        f"{reference_relationship('DefiningTable', table_name)}"
        f"{reference_relationship('ForeignColumns', *foreign_columns)}"
        f"{reference_relationship('ForeignTable', foreign_table)}"
        "</Element>"
    )


def default_constraint(table_name: str, column: str, expression: str = "(getdate())") -> str:
    return (
        '<Element Type="SqlDefaultConstraint">'
        f'{script_prop("DefaultExpressionScript", expression)}'
        f"{reference_relationship('DefiningTable', table_name)}"
        f"{reference_relationship('ForColumn', column)}"
        "</Element>"
    )


def view_column(full_name: str, ref=None) -> str:
    dependencies = reference_relationship("ExpressionDependencies", ref) if ref else ""
    return f'<Element Type="SqlComputedColumn" Name={quoteattr(full_name)}>{dependencies}</Element>'


def dynamic_object(full_name: str, columns=(), nested=()) -> str:
    nested_part = relationship("DynamicObjects", *nested) if nested else ""
    return (
        f'<Element Type="SqlDynamicColumnSource" Name={quoteattr(full_name)}>'
        f"{relationship('Columns', *columns)}{nested_part}</Element>"
    )


def view(full_name: str, query: str, columns=(), dynamic_objects=()) -> str:
    dynamic_part = relationship("DynamicObjects", *dynamic_objects) if dynamic_objects else ""
    return (
        f'<Element Type="SqlView" Name={quoteattr(full_name)}>'
        f'{script_prop("QueryScript", query)}'
        f"{relationship('Columns', *columns)}{dynamic_part}"
        "</Element>"
    )


def parameter(full_name: str, type_name: str = "[int]", is_output=None) -> str:
    output = prop("IsOutput", is_output) if is_output is not None else ""
    return (
        f'<Element Type="SqlSubroutineParameter" Name={quoteattr(full_name)}>'
        f"{output}{type_specifier(type_name)}</Element>"
    )


def procedure(full_name: str, *parameters: str) -> str:
    parameters_part = relationship("Parameters", *parameters) if parameters else ""
    return (
        f'<Element Type="SqlProcedure" Name={quoteattr(full_name)}>'
        f'{script_prop("BodyScript", "SELECT 1")}{parameters_part}</Element>'
    )


def description(full_name: str, text: str) -> str:
    return (
        f'<Element Type="SqlExtendedProperty" Name={quoteattr(full_name)}>'
        f'{script_prop("Value", text)}'
        "</Element>"
    )


def customer_order_model() -> str:
    """Two tables, a primary key on Customer, a foreign key Order -> Customer."""
    return model_xml(
        table(
            "[dbo].[Customer]",
            simple_column("[dbo].[Customer].[Id]", "[int]", nullable="False", identity="True"),
            simple_column("[dbo].[Customer].[Name]", "[nvarchar]"),
        ),
        table(
            "[dbo].[Order]",
            simple_column("[dbo].[Order].[Id]", "[int]", nullable="False"),
            simple_column("[dbo].[Order].[CustomerId]", "[int]", nullable="False"),
        ),
        primary_key("[dbo].[PK_Customer]", "[dbo].[Customer]", "[dbo].[Customer].[Id]"),
        foreign_key(
            "[dbo].[FK_Order_Customer]",
            "[dbo].[Order]",
            ["[dbo].[Order].[CustomerId]"],
            "[dbo].[Customer]",
            ["[dbo].[Customer].[Id]"],
        ),
    )
