"""
Reporting views: dashboard, stock levels and sales.

Read-only aggregation over a state snapshot. Nothing here changes state.
"""
import csv
import io
from collections import OrderedDict
from datetime import date
from decimal import Decimal
from typing import List, Optional, Sequence

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from pharmacy_pos.core.config import settings
from pharmacy_pos.core.money import ZERO, to_money
from pharmacy_pos.schemas.state import AppState, Bill, Medicine, Supplier
from pharmacy_pos.services.inventory_service import supplier_name


class ReportModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ChartPoint(ReportModel):
    name: str
    amount: Decimal


class DashboardSummary(ReportModel):
    total_sales: Decimal
    bill_count: int
    total_medicines: int
    low_stock_count: int
    total_customers: int
    total_suppliers: int
    recent_bills: List[Bill]
    chart: List[ChartPoint]


class StockRow(ReportModel):
    id: str
    name: str
    category: str
    stock: int
    expiry_date: date
    supplier: str
    status: str


class StockReport(ReportModel):
    critical_count: int
    low_count: int
    healthy_count: int
    near_expiry_count: int
    critical: List[StockRow]
    low: List[StockRow]
    healthy: List[StockRow]
    near_expiry: List[StockRow]


class SalesReport(ReportModel):
    total_revenue: Decimal
    bill_count: int
    average_ticket: Decimal
    daily_sales: List[ChartPoint]


def total_sales(bills: Sequence[Bill]) -> Decimal:
    return to_money(sum((b.total for b in bills), ZERO))


def stock_status(stock: int) -> str:
    if stock == 0:
        return "Out of Stock"
    if stock < settings.CRITICAL_STOCK_THRESHOLD:
        return "Critical"
    if stock < settings.LOW_STOCK_THRESHOLD:
        return "Low Stock"
    return "In Stock"


def months_until(expiry: date, today: date) -> int:
    """Calendar-month distance, ignoring the day of month. Negative once expired."""
    return (expiry.year - today.year) * 12 + (expiry.month - today.month)


def is_near_expiry(medicine: Medicine, today: date) -> bool:
    return months_until(medicine.expiry_date, today) <= settings.EXPIRY_WARNING_MONTHS


def dashboard_summary(state: AppState) -> DashboardSummary:
    # bills are stored newest first; the chart reads oldest to newest
    recent = state.bills[:7]
    chart = [ChartPoint(name=b.bill_no.split("-")[-1], amount=b.total) for b in reversed(recent)]
    return DashboardSummary(
        total_sales=total_sales(state.bills),
        bill_count=len(state.bills),
        total_medicines=len(state.medicines),
        low_stock_count=sum(1 for m in state.medicines if m.stock < settings.LOW_STOCK_THRESHOLD),
        total_customers=len(state.customers),
        total_suppliers=len(state.suppliers),
        recent_bills=state.bills[:5],
        chart=chart,
    )


def _row(medicine: Medicine, suppliers: Sequence[Supplier]) -> StockRow:
    return StockRow(
        id=medicine.id,
        name=medicine.name,
        category=medicine.category,
        stock=medicine.stock,
        expiry_date=medicine.expiry_date,
        supplier=supplier_name(suppliers, medicine.supplier_id),
        status=stock_status(medicine.stock),
    )


def stock_report(medicines: Sequence[Medicine], suppliers: Sequence[Supplier], today: Optional[date] = None) -> StockReport:
    today = today or date.today()
    rows = [(m, _row(m, suppliers)) for m in medicines]
    critical = [r for m, r in rows if m.stock < settings.CRITICAL_STOCK_THRESHOLD]
    low = [r for m, r in rows if m.stock < settings.LOW_STOCK_THRESHOLD]
    healthy = [r for m, r in rows if m.stock >= settings.LOW_STOCK_THRESHOLD]
    near_expiry = sorted(
        (r for m, r in rows if is_near_expiry(m, today)),
        key=lambda r: r.expiry_date,
    )
    return StockReport(
        critical_count=len(critical),
        low_count=len(low),
        healthy_count=len(healthy),
        near_expiry_count=len(near_expiry),
        critical=critical,
        low=low,
        healthy=healthy,
        near_expiry=near_expiry,
    )


def sales_report(bills: Sequence[Bill], days: int = 10) -> SalesReport:
    revenue = total_sales(bills)
    average = to_money(revenue / len(bills)) if bills else ZERO

    daily = OrderedDict()
    for b in sorted(bills, key=lambda b: b.date):
        key = b.date.date().isoformat()
        daily[key] = daily.get(key, ZERO) + b.total
    points = [ChartPoint(name=d, amount=to_money(a)) for d, a in daily.items()][-days:]

    return SalesReport(
        total_revenue=revenue,
        bill_count=len(bills),
        average_ticket=average,
        daily_sales=points,
    )


def export_bills_csv(bills: Sequence[Bill]) -> str:
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(["Bill No", "Date", "Customer", "Items", "Total", "Cash Received", "Balance"])
    for b in bills:
        writer.writerow([
            b.bill_no,
            b.date.strftime("%Y-%m-%d %H:%M"),
            b.customer_name,
            sum(i.quantity for i in b.items),
            f"{b.total:.2f}",
            f"{b.cash_received:.2f}",
            f"{b.balance:.2f}",
        ])
    return output.getvalue()


def export_inventory_csv(medicines: Sequence[Medicine], suppliers: Sequence[Supplier]) -> str:
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(["ID", "Medicine Name", "Generic Name", "Category", "Price", "Cost Price", "Stock", "Expiry Date", "Supplier"])
    for m in medicines:
        writer.writerow([
            m.id,
            m.name,
            m.generic_name or "",
            m.category,
            f"{m.price:.2f}",
            f"{m.cost_price:.2f}",
            m.stock,
            m.expiry_date.isoformat(),
            supplier_name(suppliers, m.supplier_id),
        ])
    return output.getvalue()
