"""Errors raised by floral.

Only two things can go wrong: the bundled dataset is broken (fatal, raised
once at startup) or a lookup matches nothing (expected, reported to the user).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from floral.query import QueryMode


class FloralError(Exception):
    """Base class for all floral errors."""


class DatasetError(FloralError):
    """The formula dataset is missing or does not match the schema.

    Attributes:
        message: What was wrong.
        path: The dataset file, if known.
        line: The 1-based line number of the offending row, if known.
    """

    def __init__(
        self,
        message: str,
        path: str | Path | None = None,
        line: int | None = None,
    ) -> None:
        self.message = message
        self.path = Path(path) if path is not None else None
        self.line = line

        location = ""
        if self.path is not None:
            location = str(self.path)
            if line is not None:
                location += f":{line}"
        super().__init__(f"{location}: {message}" if location else message)


class NotFoundError(FloralError, LookupError):
    """A family or order name matched no record.

    Attributes:
        key: The name that was looked up.
        mode: The query mode the lookup used.
        suggestions: Close names from the dataset, best first.
    """

    def __init__(
        self,
        key: str,
        mode: QueryMode,
        suggestions: list[str] | tuple[str, ...] = (),
    ) -> None:
        self.key = key
        self.mode = mode
        self.suggestions = list(suggestions)
        super().__init__(f"No data for {key}.")
