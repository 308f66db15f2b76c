from fastapi import APIRouter, Depends, Query

from auth_dependency import get_current_user
from config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from dependencies import get_user_service
from schemas.user import UpdateProfileRequest
from services.user_service import UserService


router = APIRouter(
    prefix="/users",
    tags=["Users"]
)


@router.get("/search")
def search_users(
    q: str = Query(..., description="Nickname fragment"),
    page: int = Query(0),
    size: int = Query(DEFAULT_PAGE_SIZE, le=MAX_PAGE_SIZE),
    current_user: dict = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    return {
        "status": "success",
        "data": user_service.search(q, page, size)
    }


@router.put("/me/profile")
def update_profile(
    request: UpdateProfileRequest,
    current_user: dict = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    user_service.update_profile(current_user["user_id"], request)
    return {"status": "success"}


@router.get("/{target_id}/profile")
def get_profile(
    target_id: str,
    current_user: dict = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    return {
        "status": "success",
        "data": user_service.get_profile(current_user["user_id"], target_id)
    }


@router.get("/{target_id}/trades")
def get_user_trades(
    target_id: str,
    page: int = Query(0),
    size: int = Query(DEFAULT_PAGE_SIZE, le=MAX_PAGE_SIZE),
    current_user: dict = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    return {
        "status": "success",
        "data": user_service.user_trades(current_user["user_id"], target_id, page, size)
    }


@router.get("/{target_id}/journals")
def get_user_journals(
    target_id: str,
    page: int = Query(0),
    size: int = Query(DEFAULT_PAGE_SIZE, le=MAX_PAGE_SIZE),
    current_user: dict = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    return {
        "status": "success",
        "data": user_service.user_journals(current_user["user_id"], target_id, page, size)
    }
