from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class AuthorSummary(BaseModel):
    id: str
    nickname: str


class User(BaseModel):
    id: str
    email: str
    nickname: str
    bio: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_item(cls, item: dict) -> "User":
        return cls(
            id=item["user_id"],
            email=item["email"],
            nickname=item["nickname"],
            bio=item.get("bio"),
            created_at=item["created_at"],
        )

    def summary(self) -> AuthorSummary:
        return AuthorSummary(id=self.id, nickname=self.nickname)


class UserSearchResult(BaseModel):
    id: str
    nickname: str
    bio: Optional[str] = None


class UserProfile(BaseModel):
    id: str
    nickname: str
    bio: Optional[str] = None
    created_at: datetime
    follower_count: int
    following_count: int
    is_following: bool
    is_own_profile: bool


class UpdateProfileRequest(BaseModel):
    bio: Optional[str] = Field(default=None, max_length=200)


class FollowUser(BaseModel):
    id: str
    nickname: str
    bio: Optional[str] = None
    is_following: bool


class FollowStatus(BaseModel):
    is_following: bool
