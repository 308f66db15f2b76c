from fastapi import APIRouter, Depends, Query

from auth_dependency import get_current_user
from config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from dependencies import get_feed_service
from services.feed_service import FeedService


router = APIRouter(
    prefix="/feed",
    tags=["Feed"]
)


@router.get("")
def get_feed(
    page: int = Query(0, description="Zero-based page index"),
    size: int = Query(DEFAULT_PAGE_SIZE, le=MAX_PAGE_SIZE, description="Items per page"),
    current_user: dict = Depends(get_current_user),
    feed_service: FeedService = Depends(get_feed_service),
):
    feed = feed_service.build_feed(current_user["user_id"], page, size)

    return {
        "status": "success",
        "data": feed
    }
