import logging

from errors import InvalidArgumentError
from schemas.common import Page
from schemas.user import UpdateProfileRequest, UserProfile, UserSearchResult
from services.cache import USER_PROFILE
from services.paging import validate_page_request

logger = logging.getLogger(__name__)


class UserService:

    def __init__(self, user_store, follow_service, access_gate,
                 trade_service, journal_service, cache=None):
        self.user_store = user_store
        self.follow_service = follow_service
        self.access_gate = access_gate
        self.trade_service = trade_service
        self.journal_service = journal_service
        self.cache = cache

    def get_profile(self, viewer_id: str, target_id: str) -> UserProfile:
        if self.cache is None:
            return self._load_profile(viewer_id, target_id)
        return self.cache.get_or_compute(
            USER_PROFILE, viewer_id, (target_id,),
            lambda: self._load_profile(viewer_id, target_id),
        )

    def _load_profile(self, viewer_id: str, target_id: str) -> UserProfile:
        user = self.user_store.get(target_id)
        is_own = viewer_id == target_id
        return UserProfile(
            id=user.id,
            nickname=user.nickname,
            bio=user.bio,
            created_at=user.created_at,
            follower_count=self.follow_service.follower_count(target_id),
            following_count=self.follow_service.following_count(target_id),
            is_following=False if is_own else self.follow_service.is_following(viewer_id, target_id),
            is_own_profile=is_own,
        )

    def search(self, query: str, page: int, size: int) -> Page[UserSearchResult]:
        validate_page_request(page, size)
        if not query or not query.strip():
            raise InvalidArgumentError("Search query must not be blank")

        results = [
            UserSearchResult(id=u.id, nickname=u.nickname, bio=u.bio)
            for u in self.user_store.search(query)
        ]
        return Page[UserSearchResult].slice(results, page, size)

    def update_profile(self, user_id: str, request: UpdateProfileRequest) -> None:
        self.user_store.update_bio(user_id, request.bio)
        if self.cache is not None:
            self.cache.evict(USER_PROFILE)

    def user_trades(self, viewer_id: str, target_id: str, page: int, size: int):
        validate_page_request(page, size)
        self.access_gate.require_follow_or_self(viewer_id, target_id)
        return self.trade_service.list_trades(target_id, page=page, size=size)

    def user_journals(self, viewer_id: str, target_id: str, page: int, size: int):
        validate_page_request(page, size)
        self.access_gate.require_follow_or_self(viewer_id, target_id)
        return self.journal_service.list_journals(target_id, page=page, size=size)
