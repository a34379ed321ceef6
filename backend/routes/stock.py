# backend/routes/stock.py
from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request
from sqlalchemy.orm import Session

from database import get_db
from models.product import Product
from models.purchase import Purchase
from utils.tokenJWT import get_session_context, SessionContext
from utils.audit import write_log
from utils.errors import InventoryError
from utils.events import publish_low_stock
from utils import stock_ledger
import schemas.stock as stock_schemas

router = APIRouter(tags=["Stock"])


def _ip(request: Request):
    return request.client.host if request.client else None


@router.post("/stock/adjust", response_model=stock_schemas.StockAdjustmentResponse)
def adjust_stock(
    payload: stock_schemas.StockAdjustRequest,
    request: Request,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    try:
        result = stock_ledger.adjust_stock(db, ctx.store_id, payload.product_id, payload.change_qty)
    except InventoryError as e:
        write_log(db, user_id=ctx.user_id, store_id=ctx.store_id, action="STOCK_ADJUSTMENT", resource="stock",
                  status="FAIL", ip=_ip(request), meta={"product_id": payload.product_id, "reason": e.message})
        raise

    write_log(db, user_id=ctx.user_id, store_id=ctx.store_id, action="STOCK_ADJUSTMENT", resource="stock",
              status="SUCCESS", ip=_ip(request),
              meta={"product_id": result.product_id, "change": result.change_qty, "stock": result.new_stock})
    publish_low_stock([result], background_tasks)
    return result


@router.post("/stock/{product_id}/restock", response_model=stock_schemas.StockAdjustmentResponse)
def restock_product(
    product_id: str,
    payload: stock_schemas.RestockRequest,
    request: Request,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    extra_fields = {"amount_bought": Product.amount_bought + payload.quantity}
    if payload.price is not None:
        extra_fields["price"] = payload.price
    if payload.supplier:
        extra_fields["supplier"] = payload.supplier

    result = stock_ledger.adjust_stock(db, ctx.store_id, product_id, payload.quantity, extra_fields)

    db.add(Purchase(
        store_id=ctx.store_id, product_id=result.product_id, product_name=result.name,
        quantity=payload.quantity, unit_price=payload.price, supplier=payload.supplier,
    ))
    db.commit()

    write_log(db, user_id=ctx.user_id, store_id=ctx.store_id, action="STOCK_RESTOCK", resource="stock",
              status="SUCCESS", ip=_ip(request), meta={"product_id": product_id, "quantity": payload.quantity})
    return result


@router.post("/purchases", response_model=stock_schemas.PurchaseResult, status_code=201)
def purchase_products(
    payload: stock_schemas.PurchaseCreate,
    request: Request,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    """Buy catalog items; items the store has never held are created first."""
    adjustments, purchases = [], []
    for item in payload.items:
        result = stock_ledger.ensure_and_adjust(db, ctx.store_id, {
            "id": item.id,
            "name": item.name,
            "price": item.price,
            "quantity": item.quantity,
            "supplier": payload.supplier,
        })
        purchase = Purchase(
            store_id=ctx.store_id, product_id=result.product_id, product_name=item.name,
            quantity=item.quantity, unit_price=item.price, supplier=payload.supplier,
        )
        db.add(purchase)
        db.commit()
        db.refresh(purchase)
        adjustments.append(result)
        purchases.append(purchase)

    write_log(db, user_id=ctx.user_id, store_id=ctx.store_id, action="PURCHASE", resource="stock",
              status="SUCCESS", ip=_ip(request),
              meta={"items": len(purchases), "units": sum(p.quantity for p in purchases), "supplier": payload.supplier})
    return {"adjustments": adjustments, "purchases": purchases}


@router.get("/purchases", response_model=stock_schemas.PurchasePage)
def list_purchases(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    supplier: str = Query(None),
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    query = db.query(Purchase).filter(Purchase.store_id == ctx.store_id)
    if supplier:
        query = query.filter(Purchase.supplier.ilike(f"%{supplier}%"))
    query = query.order_by(Purchase.created_at.desc(), Purchase.id.desc())

    total = query.count()
    items = query.offset((page - 1) * page_size).limit(page_size).all()
    return {"items": items, "total": total, "page": page, "page_size": page_size}
