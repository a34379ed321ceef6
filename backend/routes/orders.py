# backend/routes/orders.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from database import get_db
from models.order import Order
from utils.tokenJWT import get_session_context, SessionContext
from utils.audit import write_log
import schemas.order as order_schemas

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.post("", response_model=order_schemas.OrderResponse, status_code=201)
def create_order(
    payload: order_schemas.OrderCreate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    items = [item.model_dump() for item in payload.items]
    total = round(sum(i["price"] * i["quantity"] for i in items), 2)

    order = Order(
        store_id=ctx.store_id,
        customer=payload.customer.strip(),
        email=payload.email,
        phone=payload.phone,
        address=payload.address,
        shipping=payload.shipping,
        items=items,
        total=total,
        status="Processing",
    )
    db.add(order)
    db.commit()
    db.refresh(order)

    write_log(db, user_id=ctx.user_id, store_id=ctx.store_id, action="ORDER_CREATE", resource="orders",
              status="SUCCESS", meta={"order_id": order.id, "total": total})
    return order


@router.get("", response_model=order_schemas.OrdersPage)
def list_orders(
    status: Optional[order_schemas.OrderStatus] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    query = db.query(Order).filter(Order.store_id == ctx.store_id)
    if status:
        query = query.filter(Order.status == status)
    query = query.order_by(Order.created_at.desc(), Order.id.desc())

    total = query.count()
    items = query.offset((page - 1) * page_size).limit(page_size).all()
    return {"items": items, "total": total, "page": page, "page_size": page_size}


@router.patch("/{order_id}/status", response_model=order_schemas.OrderResponse)
def update_order_status(
    order_id: int,
    payload: order_schemas.OrderStatusPatch,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    order = db.query(Order).filter(Order.id == order_id, Order.store_id == ctx.store_id).first()
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")

    old_status = order.status
    order.status = payload.status
    db.commit()
    db.refresh(order)

    write_log(db, user_id=ctx.user_id, store_id=ctx.store_id, action="ORDER_STATUS", resource="orders",
              status="SUCCESS", meta={"order_id": order.id, "from": old_status, "to": payload.status})
    return order
