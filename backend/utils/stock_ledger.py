# backend/utils/stock_ledger.py
"""Invariant-preserving stock mutations.

Every change to ``Product.stock`` goes through this module. A change is a
read-check-write on a single product row executed inside
``database.run_transaction``: the row is read (locked where the database
supports ``FOR UPDATE``), the decrement is checked against the available
stock and the new value is written with a version check, so a concurrent
writer forces a retry instead of an oversell.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import run_transaction
from models.product import Product
from utils.errors import NotFound, InsufficientStock, InvalidArgument

logger = logging.getLogger(__name__)

# Attributes a caller may merge into the product together with a stock change
ADJUSTABLE_FIELDS = {"amount_bought", "amount_sold", "price", "selling_price", "supplier", "name", "category"}


@dataclass
class StockAdjustment:
    store_id: int
    product_id: str
    name: str
    previous_stock: int
    new_stock: int
    change_qty: int


def _check_ids(store_id, product_id) -> None:
    if not store_id:
        raise InvalidArgument("Store ID is required")
    if not product_id:
        raise InvalidArgument("Product ID is required")


def _check_extra_fields(extra_fields: Dict[str, Any]) -> None:
    unknown = set(extra_fields) - ADJUSTABLE_FIELDS
    if unknown:
        raise InvalidArgument(f"Fields cannot be updated with a stock change: {', '.join(sorted(unknown))}")


def apply_adjustment(
    db: Session,
    store_id: int,
    product_id: str,
    change_qty: int,
    extra_fields: Optional[Dict[str, Any]] = None,
) -> StockAdjustment:
    """Apply one stock change inside the caller's open transaction.

    Nothing is committed here. Use :func:`adjust_stock` for a standalone
    change, or call this from a function passed to ``run_transaction`` to
    combine several changes into one unit.
    """
    extra_fields = extra_fields or {}
    _check_ids(store_id, product_id)
    _check_extra_fields(extra_fields)

    product = (
        db.query(Product)
        .filter(Product.store_id == store_id, Product.id == product_id)
        .populate_existing()
        .with_for_update()
        .first()
    )
    if product is None:
        raise NotFound(f"Product {product_id} not found")

    current_stock = product.stock or 0
    if change_qty < 0 and current_stock < abs(change_qty):
        raise InsufficientStock(product.name, abs(change_qty), current_stock)

    new_stock = max(current_stock + change_qty, 0)
    product.stock = new_stock
    for key, value in extra_fields.items():
        setattr(product, key, value)

    # Version-checked UPDATE; a concurrent writer surfaces as StaleDataError
    db.flush()

    return StockAdjustment(
        store_id=store_id,
        product_id=product_id,
        name=product.name,
        previous_stock=current_stock,
        new_stock=new_stock,
        change_qty=change_qty,
    )


def adjust_stock(
    db: Session,
    store_id: int,
    product_id: str,
    change_qty: int,
    extra_fields: Optional[Dict[str, Any]] = None,
) -> StockAdjustment:
    """Atomically change a product's stock by ``change_qty``.

    Positive values restock, negative values sell. Raises ``NotFound`` when
    the product does not exist in the store and ``InsufficientStock`` when a
    decrement exceeds the available stock; in both cases nothing is written.
    """
    result = run_transaction(
        db, lambda tx: apply_adjustment(tx, store_id, product_id, change_qty, extra_fields)
    )
    logger.info(
        "Stock of %s/%s changed %+d (%s -> %s)",
        store_id, product_id, change_qty, result.previous_stock, result.new_stock,
    )
    return result


def _create_if_absent(db: Session, store_id: int, product: Dict[str, Any]) -> bool:
    if db.get(Product, (store_id, product["id"])) is not None:
        return False

    db.add(Product(
        store_id=store_id,
        id=product["id"],
        name=product.get("name") or product["id"],
        stock=0,
        amount_bought=0,
        amount_sold=0,
        price=product.get("price") or 0,
        supplier=product.get("supplier") or None,
        created_at=datetime.now(timezone.utc),
    ))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        # Only a lost insert race is recoverable; constraint violations propagate
        if db.get(Product, (store_id, product["id"])) is None:
            raise
        logger.info("Product %s/%s was created concurrently", store_id, product["id"])
        return False
    logger.info("Created product %s/%s (%s)", store_id, product["id"], product.get("name"))
    return True


def ensure_and_adjust(db: Session, store_id: int, product: Dict[str, Any]) -> StockAdjustment:
    """Find-or-create a product, then add ``product["quantity"]`` to its stock.

    ``product`` holds ``id``, ``name``, ``price``, ``quantity`` and optionally
    ``supplier``. A missing product is created with zero stock and counters
    before the adjustment, so a brand-new product ends with ``stock`` and
    ``amount_bought`` equal to ``quantity``.

    An ``amount_bought`` key in ``product`` is ignored: the stored counter
    is incremented by ``quantity`` so concurrent purchases are never lost.

    The create and the adjustment are two separate transactions.
    """
    if not store_id:
        raise InvalidArgument("Store ID is required")
    if not product.get("id"):
        raise InvalidArgument(f"Missing product ID for product: {product.get('name')}")

    quantity = int(product.get("quantity") or 0)
    if quantity < 0:
        raise InvalidArgument("Purchased quantity cannot be negative")

    _create_if_absent(db, store_id, product)

    extra_fields: Dict[str, Any] = {"amount_bought": Product.amount_bought + quantity}
    if product.get("price") is not None:
        extra_fields["price"] = product["price"]
    if product.get("supplier"):
        extra_fields["supplier"] = product["supplier"]

    return adjust_stock(db, store_id, product["id"], quantity, extra_fields)
