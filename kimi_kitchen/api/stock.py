"""Current stock endpoint."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from kimi_kitchen.api.deps import get_current_user
from kimi_kitchen.database import get_db
from kimi_kitchen.models.user import User
from kimi_kitchen.schemas.ingredient import StockList
from kimi_kitchen.services.reports import get_stock_rows

router = APIRouter(prefix="/stock", tags=["stock"])


@router.get("", response_model=StockList)
def list_stock(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Current stock per ingredient, ordered by ingredient name."""
    rows = get_stock_rows(db)
    return StockList(stock=rows, count=len(rows))
