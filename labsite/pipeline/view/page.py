"""A content page: one loader feeding one view.

:class:`FeedPage` wires the stages together the way a page uses them: a
reload runs the loader, and the view's record set is replaced with whatever
the loader holds as current afterwards. A superseded load therefore never
reaches the view.
"""

from __future__ import annotations

from typing import Generic

from labsite.pipeline.feeds.schema import R
from labsite.pipeline.loader import FeedLoader, LoadResult

from .filtering import FeedView


class FeedPage(Generic[R]):
    """Loader plus view for one content type."""

    def __init__(self, loader: FeedLoader[R]) -> None:
        self.loader = loader
        self.view: FeedView[R] = FeedView(loader.schema, loader.records)

    @property
    def result(self) -> LoadResult[R]:
        return self.loader.current

    async def reload(self) -> LoadResult[R]:
        """Reload the feed and refresh the view from the current result."""
        await self.loader.load()
        self.view.set_records(self.loader.records)
        return self.loader.current

    def close(self) -> None:
        self.loader.close()


__all__ = ["FeedPage"]
