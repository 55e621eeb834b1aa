"""Delimiter detection for spreadsheet CSV exports.

Published sheets arrive comma-, tab- or semicolon-separated depending on the
export locale. Only the header line is inspected; the choice is advisory and
never validated against the remaining lines. When the header holds none of
the three, the CSV sniffer decides from a sample of the whole feed.
"""

from __future__ import annotations

import csv
from typing import NamedTuple

from labsite.config import PARSER_DEFAULT_LABEL, SNIFF_DELIMITERS, SNIFF_SAMPLE_CHARS


class DelimiterChoice(NamedTuple):
    """Delimiter chosen for a feed and the reason it was chosen.

    Attributes
    ----------
    delimiter : str | None
        The field delimiter, or ``None`` to use the parser default.
    reason : str
        Human-readable explanation surfaced in diagnostics.
    """

    delimiter: str | None
    reason: str

    @property
    def label(self) -> str:
        """Return a printable label for diagnostics."""
        if self.delimiter is None:
            return PARSER_DEFAULT_LABEL
        if self.delimiter == "\t":
            return "\\t"
        return self.delimiter


_CANDIDATES: tuple[tuple[str, str], ...] = (
    ("\t", "TAB delimiter detected in header"),
    (",", "Comma delimiter detected in header"),
    (";", "Semicolon delimiter detected in header"),
)


def first_line(text: str) -> str:
    """Return the first line of ``text`` without its line terminator."""
    return (text or "").split("\n", 1)[0].rstrip("\r")


def detect_delimiter(text: str) -> DelimiterChoice:
    """Choose the field delimiter from the feed's header line.

    Candidates are checked in fixed priority order: tab, comma, semicolon.

    Parameters
    ----------
    text : str
        Raw feed text.

    Returns
    -------
    DelimiterChoice
        The first candidate present in the header line, or a choice with
        ``delimiter=None`` when none is present.

    Examples
    --------
    >>> detect_delimiter("id;title\\n1;A").delimiter
    ';'
    >>> detect_delimiter("id\\ttitle,x").delimiter
    '\\t'
    >>> detect_delimiter("id").delimiter is None
    True
    """
    header = first_line(text)
    for delimiter, reason in _CANDIDATES:
        if delimiter in header:
            return DelimiterChoice(delimiter, reason)
    return DelimiterChoice(None, "No obvious delimiter; using parser default")


def sniff_delimiter(text: str) -> DelimiterChoice:
    """Let the CSV sniffer pick a delimiter from a sample of the feed.

    Used when the header line has no tab, comma or semicolon. The sniffer
    looks at whole lines, so pipe-separated exports and single-column feeds
    are told apart. A single-column feed keeps ``delimiter=None`` and is
    read with a comma.

    Examples
    --------
    >>> sniff_delimiter("id|title\\n1|A\\n").delimiter
    '|'
    >>> sniff_delimiter("id\\n1\\n").delimiter is None
    True
    """
    try:
        dialect = csv.Sniffer().sniff(text[:SNIFF_SAMPLE_CHARS], delimiters=SNIFF_DELIMITERS)
    except csv.Error:
        return DelimiterChoice(None, "No obvious delimiter; using parser default")
    return DelimiterChoice(
        dialect.delimiter,
        f"No obvious delimiter; parser auto-detected {dialect.delimiter!r}",
    )


__all__ = ["DelimiterChoice", "detect_delimiter", "first_line", "sniff_delimiter"]
