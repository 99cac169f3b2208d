"""Aggregate report endpoint."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from kimi_kitchen.api.deps import get_current_user
from kimi_kitchen.database import get_db
from kimi_kitchen.models.user import User
from kimi_kitchen.schemas.report import ReportResponse, ReportSummary, StockReportRow
from kimi_kitchen.services.reports import build_report, is_low_stock

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("", response_model=ReportResponse)
def get_report(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Stock levels, the last 10 production runs and orders, and totals."""
    report = build_report(db)

    stock_rows = [
        StockReportRow(
            ingredient_id=row.ingredient_id,
            ingredient_name=row.ingredient.name,
            unit=row.ingredient.unit,
            quantity=row.quantity,
            latest_unit_price=row.ingredient.latest_unit_price,
            is_low_stock=is_low_stock(row.quantity),
        )
        for row in report["stock"]
    ]

    return ReportResponse(
        stock=stock_rows,
        production=report["production"],
        orders=report["orders"],
        summary=ReportSummary(**report["summary"]),
    )
