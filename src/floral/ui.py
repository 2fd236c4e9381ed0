"""Shared terminal display helpers for floral.

This module formats records into the text blocks printed by the command
line, and wraps long explanation lines.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from collections.abc import Iterable

    from floral.formula import FloralRecord

WRAP_WIDTH = 70

HEADER_SEPARATOR = " -> "


def format_name(name: str) -> str:
    """Upper-case the first letter of a taxon name, leaving the rest alone."""
    return name[:1].upper() + name[1:]


def wrap_text(
    text: str,
    width: int = WRAP_WIDTH,
    indent: str = "  ",
    hanging: str | None = None,
) -> str:
    """Word wrap text.

    Args:
        text: The text to wrap. Runs of whitespace collapse to one space.
        width: Maximum line length, indent included. Longer words are kept whole.
        indent: Prefix for the first line.
        hanging: Prefix for the following lines. Defaults to indent.

    Returns:
        The wrapped lines joined with newlines.
    """
    if hanging is None:
        hanging = indent

    lines = []
    current_line: list[str] = []
    current_length = len(indent)

    for word in text.split():
        if current_line and current_length + len(word) + 1 > width:
            prefix = hanging if lines else indent
            lines.append(prefix + " ".join(current_line))
            current_line = [word]
            current_length = len(hanging) + len(word)
        else:
            current_length += len(word) + (1 if current_line else 0)
            current_line.append(word)

    if current_line:
        prefix = hanging if lines else indent
        lines.append(prefix + " ".join(current_line))

    return "\n".join(lines)


def format_header(record: FloralRecord) -> str:
    """The header line of a record, e.g. "Asparagales -> Orchidaceae -> Bisexual"."""
    return HEADER_SEPARATOR.join(
        [format_name(record.order), format_name(record.family), record.sexuality.label]
    )


def format_record(record: FloralRecord, explain: bool = False) -> str:
    """Format a record as its header line followed by the formula or explanation."""
    from floral.explain import explain as explain_record
    from floral.render import render

    body = explain_record(record) if explain else render(record)
    return f"{format_header(record)}\n{body}"


def display_records(
    records: Iterable[FloralRecord],
    explain: bool = False,
    file: TextIO | None = None,
) -> None:
    """Print one block per record, each followed by a blank line.

    Args:
        records: The records to show, in order.
        explain: Show the explanation instead of the bare formula.
        file: Where to print. Defaults to standard output.
    """
    out = file if file is not None else sys.stdout
    for record in records:
        print(format_record(record, explain=explain), file=out)
        print(file=out)
