from __future__ import annotations

from typing import List, Sequence

_LEADING = "| "
_SEPARATOR = " | "
_TRAILING = " |"


def render_table(rows: Sequence[Sequence[str]], header_separator: bool = True) -> List[str]:
    """Render rows as a ``|``/``-`` bordered table, one string per line.

    The first row is treated as the header: with ``header_separator`` a rule
    is drawn below it (only when there are data rows after it).
    """
    if not rows:
        return []

    widths = column_widths(rows)
    total = sum(widths) + (len(widths) - 1) * len(_SEPARATOR) + len(_LEADING) + len(_TRAILING)
    rule = "-" * total

    lines = [_LEADING + _SEPARATOR.join(cell.ljust(widths[i]) for i, cell in enumerate(row)) + _TRAILING for row in rows]

    out = [rule, lines[0]]
    if header_separator and len(rows) > 1:
        out.append(rule)
    out.extend(lines[1:])
    out.append(rule)
    return out


def column_widths(rows: Sequence[Sequence[str]]) -> List[int]:
    widths: List[int] = []
    for row in rows:
        for i, cell in enumerate(row):
            if i >= len(widths):
                widths.append(len(cell))
            elif len(cell) > widths[i]:
                widths[i] = len(cell)
    return widths
