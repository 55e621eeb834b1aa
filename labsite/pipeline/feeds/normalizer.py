"""Turn parsed feed rows into an ordered, immutable record set.

This is the schema-driven core shared by every content type: resolve the
header aliases once per feed, build a candidate record per row, keep only
rows with a non-empty identifier and label, then apply the base ordering.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from .headers import project_row, resolve_field_map
from .parser import ParsedFeed
from .schema import FeedSchema, R

logger = logging.getLogger(__name__)


def normalize_rows(
    rows: Iterable[Mapping[str, str]],
    fields: Iterable[str],
    schema: FeedSchema[R],
) -> tuple[R, ...]:
    """Normalize raw rows into records for ``schema``.

    Parameters
    ----------
    rows : Iterable[Mapping[str, str]]
        Rows keyed by normalized header label.
    fields : Iterable[str]
        Header labels of the feed.
    schema : FeedSchema
        Content type schema.

    Returns
    -------
    tuple
        Records with a non-empty ``id`` and ``label``, in base order.

    Notes
    -----
    Rows failing the identity check are dropped silently. Duplicate ids are
    not detected; every instance is kept.
    """
    field_map = resolve_field_map(fields, schema.aliases)
    records: list[R] = []
    dropped = 0
    for row in rows:
        record = schema.build(project_row(row, field_map))
        if record.id and record.label:
            records.append(record)
        else:
            dropped += 1
    if dropped:
        logger.debug("%s: dropped %d rows without id or label", schema.label, dropped)
    records.sort(key=schema.sort_key)
    return tuple(records)


def normalize_feed(parsed: ParsedFeed, schema: FeedSchema[R]) -> tuple[R, ...]:
    """Normalize a :class:`ParsedFeed` for ``schema``."""
    return normalize_rows(parsed.rows, parsed.fields, schema)


__all__ = ["normalize_feed", "normalize_rows"]
