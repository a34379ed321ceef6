# backend/schemas/notification.py
from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict


class NotificationOut(BaseModel):
    id: int
    title: str
    body: str
    type: str
    read: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NotificationList(BaseModel):
    items: List[NotificationOut]
    unread: int
