# backend/routes/products.py
from typing import Optional, List

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session
from sqlalchemy.sql.expression import ColumnElement

from config import settings
from database import get_db
from utils.tokenJWT import get_session_context, SessionContext
from utils.audit import write_log
from models.product import Product
import schemas.product as product_schemas

router = APIRouter(tags=["Products"])


# ---- HELPERS ----
def _get_product(db: Session, ctx: SessionContext, product_id: str) -> Product:
    product = db.get(Product, (ctx.store_id, product_id))
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product

def _get_unique_values(db: Session, ctx: SessionContext, column: ColumnElement) -> List[str]:
    values = (
        db.query(column).distinct()
        .filter(Product.store_id == ctx.store_id, column != None, column != "")
        .all()
    )
    return sorted(v[0] for v in values)


# =========================
# PRODUCT LIST
# =========================
@router.get("/products", response_model=product_schemas.ProductListPage)
def list_products(
    name: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    supplier: Optional[str] = Query(None),
    low_stock: bool = Query(False, description="Only products below the low-stock threshold"),
    in_stock: bool = Query(False, description="Only products with stock left"),

    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=1000),
    sort_by: str = Query("name"),
    order: str = Query("asc", pattern="^(asc|desc)$"),
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    query = db.query(Product).filter(Product.store_id == ctx.store_id)

    if name: query = query.filter(Product.name.ilike(f"%{name}%"))
    if category: query = query.filter(Product.category.ilike(f"%{category}%"))
    if supplier: query = query.filter(Product.supplier.ilike(f"%{supplier}%"))
    if low_stock: query = query.filter(Product.stock > 0, Product.stock < settings.LOW_STOCK_THRESHOLD)
    if in_stock: query = query.filter(Product.stock > 0)

    allowed = {
        "name": Product.name, "price": Product.price, "stock": Product.stock,
        "amount_sold": Product.amount_sold, "created_at": Product.created_at,
    }
    sort_col = allowed.get(sort_by.lower(), Product.name)
    query = query.order_by(sort_col.asc() if order == "asc" else sort_col.desc(), Product.id)

    total = query.count()
    items: List[Product] = query.offset((page - 1) * page_size).limit(page_size).all()

    return {
        "items": [product_schemas.ProductOut.model_validate(p) for p in items],
        "total": total, "page": page, "page_size": page_size,
    }


# =========================
# LOOKUP ENDPOINTS
# =========================
@router.get("/products/unique/categories", response_model=List[str])
def get_product_categories(db: Session = Depends(get_db), ctx: SessionContext = Depends(get_session_context)):
    return _get_unique_values(db, ctx, Product.category)

@router.get("/products/unique/suppliers", response_model=List[str])
def get_product_suppliers(db: Session = Depends(get_db), ctx: SessionContext = Depends(get_session_context)):
    return _get_unique_values(db, ctx, Product.supplier)


# =========================
# SINGLE PRODUCT
# =========================
@router.get("/products/{product_id}", response_model=product_schemas.ProductOut)
def get_product(
    product_id: str,
    db: Session = Depends(get_db), ctx: SessionContext = Depends(get_session_context),
):
    return product_schemas.ProductOut.model_validate(_get_product(db, ctx, product_id))


# =========================
# ADD PRODUCT
# =========================
@router.post("/products", response_model=product_schemas.ProductOut, status_code=201)
def add_product(
    payload: product_schemas.ProductCreate,
    request: Request,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    if payload.id and db.get(Product, (ctx.store_id, payload.id)):
        raise HTTPException(status_code=409, detail="Product id already exists")

    new_product = Product(
        store_id=ctx.store_id,
        name=payload.name, category=payload.category, supplier=payload.supplier,
        price=payload.price, selling_price=payload.selling_price,
        stock=payload.stock, amount_bought=0, amount_sold=0,
    )
    if payload.id:
        new_product.id = payload.id

    db.add(new_product)
    db.commit()
    db.refresh(new_product)

    write_log(
        db, user_id=ctx.user_id, store_id=ctx.store_id, action="PRODUCT_CREATE", resource="products",
        status="SUCCESS", ip=request.client.host if request.client else None,
        meta={"id": new_product.id, "name": new_product.name},
    )

    return product_schemas.ProductOut.model_validate(new_product)


# =========================
# PARTIAL EDIT (PATCH)
# =========================
@router.patch("/products/{product_id}", response_model=product_schemas.ProductOut)
def edit_product(
    product_id: str,
    payload: product_schemas.ProductEditRequest,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    p = _get_product(db, ctx, product_id)

    changes = payload.model_dump(exclude_unset=True)
    if "name" in changes and changes["name"] is None:
        raise HTTPException(400, "Name cannot be empty")
    if "price" in changes and changes["price"] is None:
        raise HTTPException(400, "Price cannot be empty")

    for key, value in changes.items():
        setattr(p, key, value)

    db.commit()
    db.refresh(p)

    write_log(
        db, user_id=ctx.user_id, store_id=ctx.store_id, action="PRODUCT_EDIT", resource="products",
        status="SUCCESS", meta={"product_id": p.id, "fields": sorted(changes)}
    )

    return product_schemas.ProductOut.model_validate(p)
