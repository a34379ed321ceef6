from datetime import datetime
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict


LogStatus = Literal["SUCCESS", "FAIL"]


class LogEntry(BaseModel):
    id: int
    user_id: Optional[int] = None
    action: str
    resource: str
    status: str
    ip: Optional[str] = None
    meta: Optional[Any] = None
    ts: datetime

    model_config = ConfigDict(from_attributes=True)


class LogPage(BaseModel):
    items: List[LogEntry]
    total: int
    page: int
    page_size: int
