"""Parse raw feed text into header-normalized rows.

The parser is pandas' CSV reader driven by the advisory delimiter from
:mod:`labsite.pipeline.feeds.delimiter`. All cells are read as text; no
type inference happens at this stage. Headers are normalized with
:func:`labsite.pipeline.feeds.headers.normalize_header` so downstream alias
tables only need lower-case labels.
"""

from __future__ import annotations

import csv
import io
import logging
import warnings
from typing import NamedTuple

import pandas as pd

from labsite.exceptions import FeedParseError

from .delimiter import DelimiterChoice, detect_delimiter, first_line, sniff_delimiter
from .headers import normalize_header

logger = logging.getLogger(__name__)

_BOM = "\ufeff"


class ParsedFeed(NamedTuple):
    """Structured rows of one feed plus what the parser decided.

    Attributes
    ----------
    rows : list[dict[str, str]]
        One mapping per non-blank data line, keyed by normalized header.
    fields : list[str]
        Normalized header labels in column order.
    delimiter : DelimiterChoice
        The delimiter used and why.
    header_line : str
        The raw first line of the feed.
    """

    rows: list[dict[str, str]]
    fields: list[str]
    delimiter: DelimiterChoice
    header_line: str


def parse_feed_text(text: str) -> ParsedFeed:
    """Parse delimited feed text into rows keyed by normalized headers.

    Parameters
    ----------
    text : str
        Raw feed text as returned by the transport.

    Returns
    -------
    ParsedFeed
        Parsed rows and parser metadata. Empty or header-only feeds yield no
        rows.

    Raises
    ------
    FeedParseError
        If pandas rejects the text (e.g. an unterminated quoted field).

    Notes
    -----
    Blank lines are skipped. Rows with more cells than the header are kept
    and their extra cells are truncated; rows with fewer cells are padded
    with empty strings. When a normalized header repeats, the first column
    wins. A header without tab, comma or semicolon leaves the choice to the
    CSV sniffer, so pipe-separated feeds still split.

    Examples
    --------
    >>> parsed = parse_feed_text("ID;Title\\n1;Alpha\\n")
    >>> parsed.fields, parsed.rows
    (['id', 'title'], [{'id': '1', 'title': 'Alpha'}])
    """
    text = (text or "").lstrip(_BOM)
    choice = detect_delimiter(text)
    header_line = first_line(text)
    if not text.strip():
        return ParsedFeed([], [], choice, header_line)
    if choice.delimiter is None:
        choice = sniff_delimiter(text)
    try:
        # index_col=False truncates over-long rows with a ParserWarning
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", pd.errors.ParserWarning)
            frame = pd.read_csv(
                io.StringIO(text),
                sep=choice.delimiter or ",",
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
                index_col=False,
                on_bad_lines="skip",
            )
    except pd.errors.EmptyDataError:
        return ParsedFeed([], [], choice, header_line)
    except (pd.errors.ParserError, csv.Error, ValueError) as exc:
        raise FeedParseError(
            str(exc),
            context={"delimiter": choice.label, "header_line": header_line},
        ) from exc

    fields = [normalize_header(column) for column in frame.columns]
    frame = frame.fillna("")
    rows: list[dict[str, str]] = []
    for values in frame.itertuples(index=False, name=None):
        row: dict[str, str] = {}
        for field, value in zip(fields, values):
            row.setdefault(field, str(value))
        rows.append(row)
    logger.debug(
        "Parsed %d rows with %d fields (delimiter %s)",
        len(rows),
        len(fields),
        choice.label,
    )
    return ParsedFeed(rows, fields, choice, header_line)


__all__ = ["ParsedFeed", "parse_feed_text"]
