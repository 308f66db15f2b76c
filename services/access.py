import logging

from errors import ForbiddenError

logger = logging.getLogger(__name__)


class AccessGate:
    """Cross-user visibility check for trade and journal listings."""

    def __init__(self, follow_graph):
        self.follow_graph = follow_graph

    def require_follow_or_self(self, viewer_id: str, target_id: str) -> None:
        if viewer_id == target_id:
            return
        if not self.follow_graph.is_following(viewer_id, target_id):
            logger.info(f"Denied viewer_id={viewer_id} access to target_id={target_id}")
            raise ForbiddenError("Follow required to view this content")
