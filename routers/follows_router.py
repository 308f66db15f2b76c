from fastapi import APIRouter, Depends, Query, Response, status

from auth_dependency import get_current_user
from config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from dependencies import get_follow_service
from services.follow_service import FollowService


router = APIRouter(
    prefix="/follows",
    tags=["Follows"]
)


@router.post("/{target_id}", status_code=status.HTTP_201_CREATED)
def follow_user(
    target_id: str,
    current_user: dict = Depends(get_current_user),
    follow_service: FollowService = Depends(get_follow_service),
):
    follow_service.follow(current_user["user_id"], target_id)
    return {"status": "success", "following_id": target_id}


@router.delete("/{target_id}", status_code=status.HTTP_204_NO_CONTENT)
def unfollow_user(
    target_id: str,
    current_user: dict = Depends(get_current_user),
    follow_service: FollowService = Depends(get_follow_service),
):
    follow_service.unfollow(current_user["user_id"], target_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{target_id}/status")
def follow_status(
    target_id: str,
    current_user: dict = Depends(get_current_user),
    follow_service: FollowService = Depends(get_follow_service),
):
    return {
        "status": "success",
        "data": follow_service.status(current_user["user_id"], target_id)
    }


@router.get("/{target_id}/followers")
def get_followers(
    target_id: str,
    page: int = Query(0),
    size: int = Query(DEFAULT_PAGE_SIZE, le=MAX_PAGE_SIZE),
    current_user: dict = Depends(get_current_user),
    follow_service: FollowService = Depends(get_follow_service),
):
    return {
        "status": "success",
        "data": follow_service.followers(target_id, current_user["user_id"], page, size)
    }


@router.get("/{target_id}/following")
def get_following(
    target_id: str,
    page: int = Query(0),
    size: int = Query(DEFAULT_PAGE_SIZE, le=MAX_PAGE_SIZE),
    current_user: dict = Depends(get_current_user),
    follow_service: FollowService = Depends(get_follow_service),
):
    return {
        "status": "success",
        "data": follow_service.following(target_id, current_user["user_id"], page, size)
    }
