from fastapi import APIRouter, Depends, Query

from auth_dependency import get_current_user
from dependencies import get_stock_service
from services.stock_service import StockService


router = APIRouter(
    prefix="/stocks",
    tags=["Stocks"]
)


@router.get("/search")
def search_stocks(
    q: str = Query(..., description="Ticker or company name fragment"),
    current_user: dict = Depends(get_current_user),
    stock_service: StockService = Depends(get_stock_service),
):
    return {
        "status": "success",
        "data": stock_service.search(q)
    }
