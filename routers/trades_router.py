from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response, status

from auth_dependency import get_current_user
from config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from dependencies import get_stats_service, get_trade_service
from schemas.trade import Position, TradeRequest, TradeRetrospectiveRequest
from services.stats_service import TradeStatsService
from services.trade_service import TradeService


router = APIRouter(
    prefix="/trades",
    tags=["Trades"]
)


@router.get("")
def get_trades(
    start_date: Optional[date] = Query(None, description="Start date (YYYY-MM-DD)"),
    end_date: Optional[date] = Query(None, description="End date (YYYY-MM-DD)"),
    ticker: Optional[str] = Query(None, description="Filter by ticker"),
    position: Optional[Position] = Query(None, description="Filter by BUY or SELL"),
    page: int = Query(0),
    size: int = Query(DEFAULT_PAGE_SIZE, le=MAX_PAGE_SIZE),
    current_user: dict = Depends(get_current_user),
    trade_service: TradeService = Depends(get_trade_service),
):
    trades = trade_service.list_trades(
        current_user["user_id"], start_date, end_date, ticker, position, page, size
    )

    return {
        "status": "success",
        "data": trades
    }


@router.get("/stats")
def get_trade_stats(
    period: str = Query("all", description="today, week, month, year or all"),
    current_user: dict = Depends(get_current_user),
    stats_service: TradeStatsService = Depends(get_stats_service),
):
    stats = stats_service.compute_stats(current_user["user_id"], period)

    return {
        "status": "success",
        "period": period,
        "data": stats
    }


@router.get("/{trade_id}")
def get_trade(
    trade_id: str,
    current_user: dict = Depends(get_current_user),
    trade_service: TradeService = Depends(get_trade_service),
):
    return {
        "status": "success",
        "data": trade_service.get_trade(current_user["user_id"], trade_id)
    }


@router.post("", status_code=status.HTTP_201_CREATED)
def create_trade(
    request: TradeRequest,
    current_user: dict = Depends(get_current_user),
    trade_service: TradeService = Depends(get_trade_service),
):
    return {
        "status": "success",
        "data": trade_service.create_trade(current_user["user_id"], request)
    }


@router.post("/bulk", status_code=status.HTTP_201_CREATED)
def bulk_create_trades(
    requests: List[TradeRequest],
    current_user: dict = Depends(get_current_user),
    trade_service: TradeService = Depends(get_trade_service),
):
    trades = trade_service.bulk_create(current_user["user_id"], requests)

    return {
        "status": "success",
        "created_count": len(trades),
        "data": trades
    }


@router.put("/{trade_id}")
def update_trade(
    trade_id: str,
    request: TradeRequest,
    current_user: dict = Depends(get_current_user),
    trade_service: TradeService = Depends(get_trade_service),
):
    return {
        "status": "success",
        "data": trade_service.update_trade(current_user["user_id"], trade_id, request)
    }


@router.delete("/{trade_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_trade(
    trade_id: str,
    current_user: dict = Depends(get_current_user),
    trade_service: TradeService = Depends(get_trade_service),
):
    trade_service.delete_trade(current_user["user_id"], trade_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{trade_id}/retrospective")
def update_retrospective(
    trade_id: str,
    request: TradeRetrospectiveRequest,
    current_user: dict = Depends(get_current_user),
    trade_service: TradeService = Depends(get_trade_service),
):
    return {
        "status": "success",
        "data": trade_service.update_retrospective(current_user["user_id"], trade_id, request)
    }


@router.delete("/{trade_id}/retrospective", status_code=status.HTTP_204_NO_CONTENT)
def delete_retrospective(
    trade_id: str,
    current_user: dict = Depends(get_current_user),
    trade_service: TradeService = Depends(get_trade_service),
):
    trade_service.delete_retrospective(current_user["user_id"], trade_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
