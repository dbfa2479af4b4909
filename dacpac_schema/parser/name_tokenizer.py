"""
Qualified name tokenizer.

model.xml names every object by its fully qualified, bracket-quoted name,
e.g. ``[dbo].[Order Detail].[UnitPrice]``. Names outside brackets may also
appear bare (``dbo.Orders``). This module splits such names into segments.
"""

import re

# A segment is either [anything but brackets] or a bare identifier starting
# with a letter, _, @ or #.
NAME_SEGMENT_PATTERN = re.compile(
    r"\[(?P<bracketed>[^\[\]]+)\]|(?P<bare>[A-Za-z_@#][A-Za-z0-9_@#$]*)"
)


def split_full_name(full_name: str) -> list[str]:
    """Split a qualified name into its segments.

    Brackets are stripped; dots inside brackets do not split. Input that
    contains no recognisable segment yields an empty list, never an error:
    callers check the segment count for their context.

    Args:
        full_name: Qualified name, e.g. "[dbo].[Customer]" or "dbo.Customer".

    Returns:
        Segments in order, e.g. ["dbo", "Customer"].

    Example:
        >>> split_full_name("[dbo].[Order Detail]")
        ['dbo', 'Order Detail']
        >>> split_full_name("dbo.Orders")
        ['dbo', 'Orders']
    """
    segments: list[str] = []
    for match in NAME_SEGMENT_PATTERN.finditer(full_name or ""):
        bracketed = match.group("bracketed")
        segments.append(bracketed if bracketed is not None else match.group("bare"))
    return segments


def last_segment(full_name: str) -> str:
    """Return the last segment of a qualified name, or "" if there is none."""
    segments = split_full_name(full_name)
    return segments[-1] if segments else ""


def strip_brackets(name: str) -> str:
    """Remove every square bracket, e.g. "[nvarchar]" -> "nvarchar"."""
    return name.replace("[", "").replace("]", "")
