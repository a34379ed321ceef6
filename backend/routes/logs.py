# backend/routes/logs.py
from datetime import date, datetime, time
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database import get_db
from models.log import Log
from utils.tokenJWT import get_session_context, SessionContext
import schemas.log as log_schemas

router = APIRouter(prefix="/logs", tags=["Logs"])


@router.get("", response_model=log_schemas.LogPage)
def get_store_logs(
    action: Optional[str] = Query(None, description="e.g. SALE_CREATE"),
    resource: Optional[str] = Query(None, description="e.g. stock, sales"),
    status: Optional[log_schemas.LogStatus] = Query(None),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None, description="Inclusive"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    """Audit trail of the caller's store, newest first."""
    query = db.query(Log).filter(Log.store_id == ctx.store_id)

    if action:
        query = query.filter(Log.action.ilike(f"%{action}%"))
    if resource:
        query = query.filter(Log.resource == resource)
    if status:
        query = query.filter(Log.status == status)
    if date_from:
        query = query.filter(Log.ts >= datetime.combine(date_from, time.min))
    if date_to:
        query = query.filter(Log.ts <= datetime.combine(date_to, time.max))

    total = query.count()
    items = query.order_by(Log.ts.desc(), Log.id.desc()).offset((page - 1) * page_size).limit(page_size).all()
    return {"items": items, "total": total, "page": page, "page_size": page_size}
