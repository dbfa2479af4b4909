"""
Utility helpers for dacpac schema extraction.
"""

from dacpac_schema.utils.warnings import ParseWarning, WarningCollector

__all__ = [
    "ParseWarning",
    "WarningCollector",
]
