"""Header normalization and alias resolution.

Sheet editors label columns freely ("ID", " Title ", "photo_url", "설명"), so
every header is lower-cased and trimmed, and each canonical field is resolved
to the first of its aliases present in the feed. The alias tables are static
per content type; there is no general schema inference here.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping


def normalize_header(label: object) -> str:
    """Return the lower-cased, trimmed form of a header label.

    Examples
    --------
    >>> normalize_header("  Photo_URL ")
    'photo_url'
    >>> normalize_header(None)
    ''
    """
    if label is None:
        return ""
    return str(label).strip().lower()


def resolve_field_map(
    headers: Iterable[str], aliases: Mapping[str, tuple[str, ...]]
) -> dict[str, str]:
    """Map each canonical field to the feed column that supplies it.

    Parameters
    ----------
    headers : Iterable[str]
        Header labels of the parsed feed. They are normalized here, so raw
        labels are accepted too.
    aliases : Mapping[str, tuple[str, ...]]
        Canonical field name to its accepted header labels, in priority
        order. Labels must already be in normalized form.

    Returns
    -------
    dict[str, str]
        Canonical field to normalized column name. Fields with no matching
        column are omitted; unrecognized columns never appear.

    Examples
    --------
    >>> resolve_field_map(["ID", "Desc"], {"id": ("id",), "description": ("description", "desc")})
    {'id': 'id', 'description': 'desc'}
    """
    present = {normalize_header(h) for h in headers}
    field_map: dict[str, str] = {}
    for canonical, labels in aliases.items():
        for label in labels:
            if label in present:
                field_map[canonical] = label
                break
    return field_map


def project_row(row: Mapping[str, str], field_map: Mapping[str, str]) -> dict[str, str]:
    """Return ``row`` keyed by canonical field names.

    Missing cells become empty strings so record builders never see
    ``None``.
    """
    projected: dict[str, str] = {}
    for canonical, column in field_map.items():
        value = row.get(column)
        projected[canonical] = "" if value is None else str(value)
    return projected


__all__ = ["normalize_header", "project_row", "resolve_field_map"]
