# backend/routes/sales.py
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from database import get_db, run_transaction
from models.product import Product
from models.sale import Sale, SaleItem
from utils.tokenJWT import get_session_context, SessionContext
from utils.audit import write_log
from utils.errors import InventoryError, NotFound
from utils.events import publish_low_stock
from utils.stock_ledger import apply_adjustment
import schemas.sale as sale_schemas

router = APIRouter(prefix="/sales", tags=["Sales"])


def _get_sale(db: Session, ctx: SessionContext, sale_id: int) -> Sale:
    sale = db.query(Sale).filter(Sale.id == sale_id, Sale.store_id == ctx.store_id).first()
    if not sale:
        raise HTTPException(status_code=404, detail="Sale not found")
    return sale


@router.post("", response_model=sale_schemas.SaleOut, status_code=201)
def record_sale(
    payload: sale_schemas.SaleCreate,
    request: Request,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    """Record a sale and take every sold unit out of stock.

    All decrements and the sale record commit together; one product short
    of stock rejects the whole sale.
    """
    adjustments = []

    def _sell(tx: Session) -> Sale:
        adjustments.clear()
        sale = Sale(store_id=ctx.store_id, customer=payload.customer, status="Completed", total=0)
        total = 0.0
        for item in payload.items:
            product = tx.get(Product, (ctx.store_id, item.product_id))
            if product is None:
                raise NotFound(f"Product {item.product_id} not found")
            unit_price = item.unit_price
            if unit_price is None:
                unit_price = product.selling_price if product.selling_price is not None else product.price
            adjustments.append(apply_adjustment(
                tx, ctx.store_id, item.product_id, -item.quantity,
                {"amount_sold": Product.amount_sold + item.quantity},
            ))
            sale.items.append(SaleItem(
                product_id=item.product_id, product_name=product.name,
                quantity=item.quantity, unit_price=unit_price,
            ))
            total += unit_price * item.quantity
        sale.total = round(total, 2)
        tx.add(sale)
        tx.flush()
        return sale

    try:
        sale = run_transaction(db, _sell)
    except InventoryError as e:
        write_log(db, user_id=ctx.user_id, store_id=ctx.store_id, action="SALE_CREATE", resource="sales",
                  status="FAIL", ip=request.client.host if request.client else None, meta={"reason": e.message})
        raise

    db.refresh(sale)
    write_log(db, user_id=ctx.user_id, store_id=ctx.store_id, action="SALE_CREATE", resource="sales",
              status="SUCCESS", ip=request.client.host if request.client else None,
              meta={"id": sale.id, "total": sale.total})
    publish_low_stock(adjustments, background_tasks)
    return sale


@router.get("", response_model=sale_schemas.SalePage)
def list_sales(
    customer: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    query = db.query(Sale).filter(Sale.store_id == ctx.store_id)
    if customer:
        query = query.filter(Sale.customer.ilike(f"%{customer}%"))
    query = query.order_by(Sale.created_at.desc(), Sale.id.desc())

    total = query.count()
    items = query.offset((page - 1) * page_size).limit(page_size).all()
    return {"items": items, "total": total, "page": page, "page_size": page_size}


@router.get("/{sale_id}", response_model=sale_schemas.SaleOut)
def get_sale(sale_id: int, db: Session = Depends(get_db), ctx: SessionContext = Depends(get_session_context)):
    return _get_sale(db, ctx, sale_id)


# Only bookkeeping fields can change; sold items are history
@router.patch("/{sale_id}", response_model=sale_schemas.SaleOut)
def update_sale(
    sale_id: int,
    payload: sale_schemas.SaleUpdate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    sale = _get_sale(db, ctx, sale_id)
    for key, value in payload.model_dump(exclude_unset=True).items():
        setattr(sale, key, value)
    db.commit()
    db.refresh(sale)
    write_log(db, user_id=ctx.user_id, store_id=ctx.store_id, action="SALE_UPDATE", resource="sales",
              status="SUCCESS", meta={"id": sale.id})
    return sale


# Removes the record only; stock is not given back
@router.delete("/{sale_id}")
def delete_sale(sale_id: int, db: Session = Depends(get_db), ctx: SessionContext = Depends(get_session_context)):
    sale = _get_sale(db, ctx, sale_id)
    db.delete(sale)
    db.commit()
    write_log(db, user_id=ctx.user_id, store_id=ctx.store_id, action="SALE_DELETE", resource="sales",
              status="SUCCESS", meta={"id": sale_id})
    return {"detail": f"Sale {sale_id} deleted"}
