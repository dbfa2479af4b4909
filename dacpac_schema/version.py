"""Version information."""

__version__ = "1.0.0"
__version_info__ = (1, 0, 0)

# Version history
CHANGELOG = """
# Changelog

## v1.0.0

**Dacpac model extraction**

- Tables, views, columns, primary keys, foreign keys
- Stored procedures and parameters
- MS_Description extended properties
- Computed/view column types from inline comment annotations
- View column type resolution through nested CTEs
- Default constraints (has_default)
- Foreign key graph and dependency order
- CLI with table/json output

### Known Limitations

- Stored procedure parameter length is never populated
- Only the 2012/02 serialization namespace is supported
"""
