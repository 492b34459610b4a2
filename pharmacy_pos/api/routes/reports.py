"""
Reports API: dashboard cards, stock levels and sales.

All endpoints are read-only views over the current state.
"""
from datetime import date

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from pharmacy_pos.api.deps import require_login
from pharmacy_pos.services import report_service
from pharmacy_pos.services.report_service import DashboardSummary, SalesReport, StockReport
from pharmacy_pos.services.state_store import StateStore

router = APIRouter()


@router.get("/dashboard", response_model=DashboardSummary)
def get_dashboard(store: StateStore = Depends(require_login)):
    return report_service.dashboard_summary(store.state)


@router.get("/stock", response_model=StockReport)
def get_stock_report(store: StateStore = Depends(require_login)):
    """Critical / low / healthy stock and medicines close to expiry."""
    state = store.state
    return report_service.stock_report(state.medicines, state.suppliers)


@router.get("/sales", response_model=SalesReport)
def get_sales_report(
    days: int = Query(10, ge=1, description="Number of most recent sales days to chart"),
    store: StateStore = Depends(require_login),
):
    return report_service.sales_report(store.state.bills, days=days)


@router.get("/export/bills.csv")
def export_bills(store: StateStore = Depends(require_login)):
    return StreamingResponse(
        iter([report_service.export_bills_csv(store.state.bills)]),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename=bills_{date.today()}.csv"},
    )


@router.get("/export/inventory.csv")
def export_inventory(store: StateStore = Depends(require_login)):
    state = store.state
    return StreamingResponse(
        iter([report_service.export_inventory_csv(state.medicines, state.suppliers)]),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename=inventory_{date.today()}.csv"},
    )
