"""Protocol for post sources."""

from typing import List, Protocol

from ..models.influencer import RawPost


class PostSource(Protocol):
    """Protocol for anything that can supply an influencer's recent posts."""

    async def fetch_posts(self, handle: str, max_count: int) -> List[RawPost]:
        """Fetch up to max_count recent posts for a handle.

        An empty list is a valid result. Raises SourceUnavailable when the
        upstream is unreachable or the handle is unknown.
        """
        ...
