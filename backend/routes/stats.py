# backend/routes/stats.py
import calendar
from datetime import datetime, timezone
from typing import List, Tuple

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from sqlalchemy import func

from config import settings
from database import get_db
from utils.tokenJWT import get_session_context, SessionContext
from models.product import Product
from models.sale import Sale
from models.order import Order
from schemas.reports import (
    StatsSummary, MonthlySales, PredictedRevenue, MonthlySalesResponse, TopProductsResponse,
)

router = APIRouter(
    prefix="/stats",
    tags=["Stats"]
)

# Months shown on the chart and months projected forward
HISTORY_MONTHS = 6
FORECAST_MONTHS = 6
# Projection adds this share of the last month's revenue per month ahead
MONTHLY_GROWTH = 0.05


def _last_months(today, count: int) -> List[Tuple[int, int]]:
    """(year, month) pairs for the ``count`` months ending with ``today``'s month, oldest first."""
    months = []
    year, month = today.year, today.month
    for _ in range(count):
        months.append((year, month))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(months))


def monthly_sales(sales, today) -> List[MonthlySales]:
    months = _last_months(today, HISTORY_MONTHS)
    buckets = {m: [0, 0.0] for m in months}
    for sale in sales:
        if sale.created_at is None:
            continue
        key = (sale.created_at.year, sale.created_at.month)
        if key in buckets:
            buckets[key][0] += sum(item.quantity for item in sale.items)
            buckets[key][1] += sale.total or 0
    return [
        MonthlySales(month=calendar.month_abbr[m], sales_count=buckets[(y, m)][0], revenue=round(buckets[(y, m)][1], 2))
        for y, m in months
    ]


def predict_revenue(history: List[MonthlySales], today) -> List[PredictedRevenue]:
    last_revenue = history[-1].revenue if history else 0.0
    prediction = []
    for i in range(1, FORECAST_MONTHS + 1):
        month = (today.month - 1 + i) % 12 + 1
        prediction.append(PredictedRevenue(
            month=calendar.month_abbr[month],
            predicted_revenue=round(last_revenue * (1 + MONTHLY_GROWTH * i), 2),
        ))
    return prediction


# === Endpoint 1: Dashboard Summary ===

@router.get("/summary", response_model=StatsSummary)
def get_stats_summary(
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context)
):
    products = db.query(Product).filter(Product.store_id == ctx.store_id)

    total_products = products.count()
    total_stock = products.with_entities(func.coalesce(func.sum(Product.stock), 0)).scalar()
    inventory_value = products.with_entities(
        func.coalesce(func.sum(Product.price * Product.stock), 0.0)
    ).scalar()
    potential_profit = products.with_entities(
        func.coalesce(func.sum((func.coalesce(Product.selling_price, Product.price) - Product.price) * Product.stock), 0.0)
    ).scalar()

    # Count products below stock threshold
    low_stock_products = products.filter(
        Product.stock > 0, Product.stock < settings.LOW_STOCK_THRESHOLD
    ).count()
    out_of_stock_products = products.filter(Product.stock == 0).count()

    sales = db.query(Sale).filter(Sale.store_id == ctx.store_id)
    total_revenue = sales.with_entities(func.coalesce(func.sum(Sale.total), 0.0)).scalar()
    total_sales = sales.count()

    pending_orders = db.query(Order).filter(Order.store_id == ctx.store_id, Order.status == "Processing").count()

    # Distinct customers across sales and orders, case-insensitive
    customers = {
        c.strip().lower() for (c,) in sales.with_entities(Sale.customer).all() if c and c.strip()
    }
    customers |= {
        c.strip().lower() for (c,) in db.query(Order.customer).filter(Order.store_id == ctx.store_id).all()
        if c and c.strip()
    }

    return StatsSummary(
        total_products=total_products,
        total_stock=total_stock,
        low_stock_products=low_stock_products,
        out_of_stock_products=out_of_stock_products,
        inventory_value=round(inventory_value, 2),
        potential_profit=round(potential_profit, 2),
        total_revenue=round(total_revenue, 2),
        total_sales=total_sales,
        pending_orders=pending_orders,
        customers=len(customers),
    )

# === Endpoint 2: Chart Data ===

@router.get("/monthly", response_model=MonthlySalesResponse)
def get_monthly_sales(
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context)
):
    today = datetime.now(timezone.utc).date()
    first_year, first_month = _last_months(today, HISTORY_MONTHS)[0]
    since = datetime(first_year, first_month, 1)

    sales = (
        db.query(Sale)
        .filter(Sale.store_id == ctx.store_id, Sale.created_at >= since)
        .all()
    )
    history = monthly_sales(sales, today)
    return MonthlySalesResponse(data=history, prediction=predict_revenue(history, today))

# === Endpoint 3: Top Products ===

@router.get("/top-products", response_model=TopProductsResponse)
def get_top_products_stats(
    limit: int = Query(5, ge=1, le=50),
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context)
):
    top_products = (
        db.query(Product)
        .filter(Product.store_id == ctx.store_id, Product.amount_sold > 0)
        .order_by(Product.amount_sold.desc(), Product.name.asc())
        .limit(limit)
        .all()
    )
    return TopProductsResponse(data=[
        {"product_id": p.id, "product_name": p.name, "total_quantity_sold": p.amount_sold}
        for p in top_products
    ])
