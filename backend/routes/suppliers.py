# backend/routes/suppliers.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from database import get_db
from models.supplier import Supplier
from utils.tokenJWT import get_session_context, SessionContext
from utils.audit import write_log
import schemas.supplier as supplier_schemas

router = APIRouter(prefix="/suppliers", tags=["Suppliers"])


def _get_supplier(db: Session, ctx: SessionContext, supplier_id: int) -> Supplier:
    supplier = db.query(Supplier).filter(Supplier.id == supplier_id, Supplier.store_id == ctx.store_id).first()
    if not supplier:
        raise HTTPException(status_code=404, detail="Supplier not found")
    return supplier


@router.get("", response_model=List[supplier_schemas.SupplierOut])
def list_suppliers(
    q: Optional[str] = Query(None, description="Search by name or email"),
    status: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    query = db.query(Supplier).filter(Supplier.store_id == ctx.store_id)
    if q:
        like = f"%{q}%"
        query = query.filter(Supplier.name.ilike(like) | Supplier.email.ilike(like))
    if status:
        query = query.filter(Supplier.status == status)
    return query.order_by(Supplier.name.asc()).all()


@router.post("", response_model=supplier_schemas.SupplierOut, status_code=201)
def add_supplier(
    payload: supplier_schemas.SupplierCreate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    supplier = Supplier(store_id=ctx.store_id, **payload.model_dump())
    db.add(supplier)
    db.commit()
    db.refresh(supplier)
    write_log(db, user_id=ctx.user_id, store_id=ctx.store_id, action="SUPPLIER_CREATE", resource="suppliers",
              status="SUCCESS", meta={"id": supplier.id, "name": supplier.name})
    return supplier


@router.get("/{supplier_id}", response_model=supplier_schemas.SupplierOut)
def get_supplier(supplier_id: int, db: Session = Depends(get_db), ctx: SessionContext = Depends(get_session_context)):
    return _get_supplier(db, ctx, supplier_id)


@router.put("/{supplier_id}", response_model=supplier_schemas.SupplierOut)
def update_supplier(
    supplier_id: int,
    payload: supplier_schemas.SupplierCreate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    supplier = _get_supplier(db, ctx, supplier_id)
    for key, value in payload.model_dump().items():
        setattr(supplier, key, value)
    db.commit()
    db.refresh(supplier)
    write_log(db, user_id=ctx.user_id, store_id=ctx.store_id, action="SUPPLIER_UPDATE", resource="suppliers",
              status="SUCCESS", meta={"id": supplier.id})
    return supplier


@router.delete("/{supplier_id}")
def delete_supplier(supplier_id: int, db: Session = Depends(get_db), ctx: SessionContext = Depends(get_session_context)):
    supplier = _get_supplier(db, ctx, supplier_id)
    name = supplier.name
    db.delete(supplier)
    db.commit()
    write_log(db, user_id=ctx.user_id, store_id=ctx.store_id, action="SUPPLIER_DELETE", resource="suppliers",
              status="SUCCESS", meta={"id": supplier_id})
    return {"detail": f"Supplier '{name}' deleted"}
