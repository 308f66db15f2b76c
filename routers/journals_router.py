from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query, Response, status

from auth_dependency import get_current_user
from config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from dependencies import get_journal_service
from schemas.journal import JournalRequest
from services.journal_service import JournalService


router = APIRouter(
    prefix="/journals",
    tags=["Journals"]
)


@router.get("")
def get_journals(
    start_date: Optional[date] = Query(None, description="Start date (YYYY-MM-DD)"),
    end_date: Optional[date] = Query(None, description="End date (YYYY-MM-DD)"),
    page: int = Query(0),
    size: int = Query(DEFAULT_PAGE_SIZE, le=MAX_PAGE_SIZE),
    current_user: dict = Depends(get_current_user),
    journal_service: JournalService = Depends(get_journal_service),
):
    return {
        "status": "success",
        "data": journal_service.list_journals(
            current_user["user_id"], start_date, end_date, page, size
        )
    }


@router.get("/{journal_id}")
def get_journal(
    journal_id: str,
    current_user: dict = Depends(get_current_user),
    journal_service: JournalService = Depends(get_journal_service),
):
    return {
        "status": "success",
        "data": journal_service.get_journal(current_user["user_id"], journal_id)
    }


@router.post("", status_code=status.HTTP_201_CREATED)
def create_journal(
    request: JournalRequest,
    current_user: dict = Depends(get_current_user),
    journal_service: JournalService = Depends(get_journal_service),
):
    return {
        "status": "success",
        "data": journal_service.create_journal(current_user["user_id"], request)
    }


@router.put("/{journal_id}")
def update_journal(
    journal_id: str,
    request: JournalRequest,
    current_user: dict = Depends(get_current_user),
    journal_service: JournalService = Depends(get_journal_service),
):
    return {
        "status": "success",
        "data": journal_service.update_journal(current_user["user_id"], journal_id, request)
    }


@router.delete("/{journal_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_journal(
    journal_id: str,
    current_user: dict = Depends(get_current_user),
    journal_service: JournalService = Depends(get_journal_service),
):
    journal_service.delete_journal(current_user["user_id"], journal_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
