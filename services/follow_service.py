import logging

from errors import InvalidArgumentError
from schemas.common import Page
from schemas.user import FollowStatus, FollowUser
from services.cache import FOLLOW_COUNTS, USER_PROFILE, FEED
from services.paging import validate_page_request

logger = logging.getLogger(__name__)

FOLLOW_WRITE_NAMESPACES = (FOLLOW_COUNTS, USER_PROFILE, FEED)


class FollowService:

    def __init__(self, follow_store, user_store, cache=None):
        self.follow_store = follow_store
        self.user_store = user_store
        self.cache = cache

    def follow(self, user_id: str, target_id: str) -> None:
        if user_id == target_id:
            raise InvalidArgumentError("Cannot follow yourself")
        self.user_store.get(target_id)
        self.follow_store.add(user_id, target_id)
        self._evict()

    def unfollow(self, user_id: str, target_id: str) -> None:
        self.follow_store.remove(user_id, target_id)
        self._evict()

    def is_following(self, user_id: str, target_id: str) -> bool:
        return self.follow_store.is_following(user_id, target_id)

    def status(self, user_id: str, target_id: str) -> FollowStatus:
        return FollowStatus(is_following=self.is_following(user_id, target_id))

    def follower_count(self, user_id: str) -> int:
        return self._count("follower", user_id, self.follow_store.follower_count)

    def following_count(self, user_id: str) -> int:
        return self._count("following", user_id, self.follow_store.following_count)

    def followers(self, target_id: str, viewer_id: str, page: int, size: int) -> Page[FollowUser]:
        validate_page_request(page, size)
        return self._user_page(self.follow_store.list_followers(target_id), viewer_id, page, size)

    def following(self, target_id: str, viewer_id: str, page: int, size: int) -> Page[FollowUser]:
        validate_page_request(page, size)
        return self._user_page(self.follow_store.list_following(target_id), viewer_id, page, size)

    def _user_page(self, user_ids: list, viewer_id: str, page: int, size: int) -> Page[FollowUser]:
        # Totals count edges; users deleted since are skipped in the content only
        start = page * size
        window = user_ids[start:start + size]
        users = self.user_store.find_by_ids(window)
        viewer_following = self.follow_store.following_ids(viewer_id)

        content = [
            FollowUser(
                id=users[uid].id,
                nickname=users[uid].nickname,
                bio=users[uid].bio,
                is_following=uid in viewer_following,
            )
            for uid in window
            if uid in users
        ]
        return Page[FollowUser].of(content, len(user_ids), page, size)

    def _count(self, kind: str, user_id: str, loader) -> int:
        if self.cache is None:
            return loader(user_id)
        return self.cache.get_or_compute(FOLLOW_COUNTS, user_id, (kind,), lambda: loader(user_id))

    def _evict(self):
        if self.cache is not None:
            self.cache.evict(*FOLLOW_WRITE_NAMESPACES)
