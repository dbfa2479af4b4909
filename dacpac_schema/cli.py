"""
Command-line interface for dacpac-schema.

This module provides a command-line interface for inspecting the schema of
a .dacpac package: listing tables and views, showing a table's columns,
stored procedures, foreign keys and descriptions, and exporting the whole
model as JSON.
"""

import argparse
import json
import sys
from pathlib import Path

from colorama import Fore, Style, init
from tabulate import tabulate

from dacpac_schema import (
    DacpacSchemaError,
    ParserConfig,
    SchemaGraph,
    SchemaModel,
    parse_archive,
    parse_model,
)

USE_COLOR = True


def _colored(msg: str, color: str) -> str:
    if USE_COLOR:
        return f"{color}{msg}{Style.RESET_ALL}"
    return msg


def print_success(msg: str) -> None:
    """Print success message."""
    print(_colored(f"[OK] {msg}", Fore.GREEN))


def print_error(msg: str) -> None:
    """Print error message."""
    print(_colored(f"[ERROR] {msg}", Fore.RED), file=sys.stderr)


def print_warning(msg: str) -> None:
    """Print warning message."""
    print(_colored(f"[WARN] {msg}", Fore.YELLOW))


def print_info(msg: str) -> None:
    """Print info message."""
    print(_colored(msg, Fore.CYAN))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dacpac-schema",
        description="Extract the database schema from a .dacpac package",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Summary of a package
  %(prog)s AdventureWorks.dacpac

  # List tables and views
  %(prog)s AdventureWorks.dacpac --list-tables

  # Columns of one table
  %(prog)s AdventureWorks.dacpac --table Customer

  # Parse an extracted model.xml instead of the archive
  %(prog)s --xml model.xml --procs

  # Export the full model
  %(prog)s AdventureWorks.dacpac --export schema.json
        """,
    )

    # === Input parameters ===
    input_group = parser.add_argument_group("Input Options")
    input_group.add_argument("dacpac", nargs="?", help=".dacpac file to read")
    input_group.add_argument("--xml", metavar="FILE", help="Read a model.xml file directly")

    # === Query parameters ===
    query_group = parser.add_argument_group("Query Options")
    query_group.add_argument(
        "--list-tables", action="store_true", help="List all tables and views"
    )
    query_group.add_argument(
        "--table", "-t", metavar="NAME", help="Show the columns of a table or view"
    )
    query_group.add_argument(
        "--procs", action="store_true", help="List stored procedures and parameters"
    )
    query_group.add_argument(
        "--relationships", action="store_true", help="List foreign keys"
    )
    query_group.add_argument(
        "--descriptions", action="store_true", help="List MS_Description properties"
    )
    query_group.add_argument(
        "--order",
        action="store_true",
        help="Print tables in foreign key dependency order",
    )

    # === Output parameters ===
    output_group = parser.add_argument_group("Output Options")
    output_group.add_argument(
        "--format",
        "-f",
        choices=["pretty", "table", "json"],
        default="pretty",
        help="Output format (default: pretty)",
    )
    output_group.add_argument(
        "--export", "-o", metavar="FILE", help="Export the full model as JSON"
    )
    output_group.add_argument(
        "--no-color", action="store_true", help="Disable colored output"
    )

    # === Configuration parameters ===
    config_group = parser.add_argument_group("Configuration")
    config_group.add_argument(
        "--strict",
        action="store_true",
        help="Fail on unsupported columns and unresolved types",
    )
    config_group.add_argument(
        "--no-warnings", action="store_true", help="Suppress warnings"
    )
    return parser


def main(argv=None) -> None:
    """
    CLI main entry point.

    Supported commands:
        dacpac-schema model.dacpac
        dacpac-schema model.dacpac --list-tables
        dacpac-schema model.dacpac --table Customer --format table
        dacpac-schema model.dacpac --procs
        dacpac-schema model.dacpac --relationships
        dacpac-schema model.dacpac --order
        dacpac-schema model.dacpac --export schema.json
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    global USE_COLOR
    if args.no_color:
        USE_COLOR = False
    else:
        init(autoreset=True)

    if not args.dacpac and not args.xml:
        parser.error("either a .dacpac file or --xml is required")

    config = ParserConfig.strict() if args.strict else ParserConfig()

    try:
        if args.xml:
            xml_path = Path(args.xml)
            if not xml_path.exists():
                print_error(f"File not found: {args.xml}")
                sys.exit(1)
            print_info(f"Reading model from: {xml_path}")
            model = parse_model(xml_path.read_bytes(), config)
        else:
            print_info(f"Reading package: {args.dacpac}")
            model = parse_archive(args.dacpac, config)

        print_success(
            f"Found {len(model.base_tables)} tables, {len(model.views)} views, "
            f"{len(model.stored_procs)} stored procedures."
        )

        if args.table:
            handle_table(model, args.table, args.format)
        elif args.list_tables:
            handle_list_tables(model, args.format)
        elif args.procs:
            handle_procs(model, args.format)
        elif args.relationships:
            handle_relationships(model, args.format)
        elif args.descriptions:
            handle_descriptions(model, args.format)
        elif args.order:
            handle_order(model)
        else:
            handle_summary(model, args.format)

        if args.export:
            handle_export(model, args.export)

        if not args.no_warnings:
            show_warnings(model)

    except DacpacSchemaError as e:
        print_error(f"Schema extraction failed: {e}")
        sys.exit(1)


def _print_rows(rows: list, headers: list, format: str) -> None:
    tablefmt = "github" if format == "table" else "simple"
    print(tabulate(rows, headers=headers, tablefmt=tablefmt))


def handle_table(model: SchemaModel, name: str, format: str) -> None:
    """Handle --table command."""
    table = model.get_table(name) or model.try_get_table_by_name(name)
    if table is None:
        print_error(f"Table not found: {name}")
        sys.exit(1)

    if format == "json":
        print(json.dumps(table.to_dict(), indent=2, ensure_ascii=False))
        return

    kind = "View" if table.is_view else "Table"
    print_info(f"\n{kind} {table.full_name}\n")
    key_columns = set(table.primary_key.column_names()) if table.primary_key else set()
    rows = [
        [
            "PK" if column.name in key_columns else "",
            column.name,
            column.data_type,
            "NULL" if column.allow_nulls else "NOT NULL",
            "yes" if column.is_identity else "",
            "yes" if column.has_default else "",
            "yes" if column.is_computed else "",
        ]
        for column in table.columns
    ]
    _print_rows(
        rows,
        ["", "Column", "Type", "Nullability", "Identity", "Default", "Computed"],
        format,
    )
    if table.primary_key:
        print(f"\nPrimary key: {table.primary_key.name}")


def handle_list_tables(model: SchemaModel, format: str) -> None:
    """Handle --list-tables command."""
    if format == "json":
        print(json.dumps([t.full_name for t in model.tables], indent=2))
        return
    rows = [
        [
            table.schema,
            table.name,
            "view" if table.is_view else "table",
            len(table.columns),
            table.primary_key.name if table.primary_key else "",
        ]
        for table in model.tables
    ]
    _print_rows(rows, ["Schema", "Name", "Kind", "Columns", "Primary key"], format)


def handle_procs(model: SchemaModel, format: str) -> None:
    """Handle --procs command."""
    if format == "json":
        print(json.dumps([p.to_dict() for p in model.stored_procs], indent=2))
        return
    rows = []
    for proc in model.stored_procs:
        if not proc.parameters:
            rows.append([proc.full_name, "", "", ""])
        for param in proc.parameters:
            rows.append(
                [proc.full_name, param.name, param.data_type, "OUTPUT" if param.is_output else ""]
            )
    _print_rows(rows, ["Procedure", "Parameter", "Type", "Direction"], format)


def handle_relationships(model: SchemaModel, format: str) -> None:
    """Handle --relationships command."""
    if format == "json":
        print(json.dumps([r.to_dict() for r in model.relationships], indent=2))
        return
    rows = [
        [
            rel.name,
            rel.defining_table.full_name,
            ", ".join(c.name for c in rel.defining_table.columns),
            rel.foreign_table.full_name,
            ", ".join(c.name for c in rel.foreign_table.columns),
        ]
        for rel in model.relationships
    ]
    _print_rows(rows, ["Name", "Table", "Columns", "References", "Columns"], format)


def handle_descriptions(model: SchemaModel, format: str) -> None:
    """Handle --descriptions command."""
    if format == "json":
        print(json.dumps([d.to_dict() for d in model.descriptions], indent=2))
        return
    rows = [
        [
            item.description_type,
            item.schema,
            item.table_name,
            item.column_name or "",
            item.description,
        ]
        for item in model.descriptions
    ]
    _print_rows(rows, ["Kind", "Schema", "Object", "Column", "Description"], format)


def handle_order(model: SchemaModel) -> None:
    """Handle --order command."""
    graph = SchemaGraph.from_model(model)
    print_info("\nTables in dependency order:\n")
    for i, full_name in enumerate(graph.dependency_order(), 1):
        print(f"  {i}. {full_name}")


def handle_summary(model: SchemaModel, format: str) -> None:
    """Show model summary."""
    if format == "json":
        print(model.to_json(indent=2))
        return

    print_info("\n" + "=" * 60)
    print_info("Schema Summary")
    print_info("=" * 60 + "\n")

    print(f"Tables: {len(model.base_tables)}")
    print(f"Views: {len(model.views)}")
    print(f"Stored procedures: {len(model.stored_procs)}")
    print(f"Foreign keys: {len(model.relationships)}")
    print(f"Descriptions: {len(model.descriptions)}")

    unresolved = [
        column.full_name
        for table in model.tables
        for column in table.columns
        if column.is_unresolved
    ]
    if unresolved:
        print(f"\nColumns typed as SQL_VARIANT: {len(unresolved)}")
        for full_name in unresolved[:5]:
            print(f"  - {full_name}")
        if len(unresolved) > 5:
            print(f"  ... and {len(unresolved) - 5} more")


def handle_export(model: SchemaModel, output_file: str) -> None:
    """Export the full model as JSON."""
    output_path = Path(output_file)
    print_info(f"\nExporting model to: {output_path}")
    output_path.write_text(model.to_json(indent=2), encoding="utf-8")
    print_success(f"Exported to {output_path}")


def show_warnings(model: SchemaModel) -> None:
    """Show parse warnings."""
    if model.warnings:
        print_warning(f"\n{len(model.warnings)} warning(s):")
        for i, warning in enumerate(model.warnings, 1):
            print(f"  {i}. {warning}")


if __name__ == "__main__":
    main()
