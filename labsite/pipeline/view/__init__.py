"""Filter/search views over loaded record sets."""

from .filtering import (
    FeedView,
    filter_records,
    group_records,
    matches_category,
    matches_query,
    normalize_query,
)
from .page import FeedPage

__all__ = [
    "FeedPage",
    "FeedView",
    "filter_records",
    "group_records",
    "matches_category",
    "matches_query",
    "normalize_query",
]
