# backend/utils/events.py
"""In-process publish/subscribe for side effects of inventory changes.

Handlers are registered with :func:`subscribe` and run after the request
that published the event has committed. A failing handler is logged and
never propagates to the publisher.
"""
import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Type

from fastapi import BackgroundTasks

from config import settings

logger = logging.getLogger(__name__)

_handlers: Dict[Type, List[Callable]] = defaultdict(list)


@dataclass(frozen=True)
class LowStockDetected:
    store_id: int
    product_id: str
    product_name: str
    stock: int
    threshold: int


def subscribe(event_type: Type):
    def _register(handler: Callable) -> Callable:
        _handlers[event_type].append(handler)
        return handler
    return _register


def _deliver(handler: Callable, event) -> None:
    try:
        handler(event)
    except Exception:
        logger.exception("Handler %s failed for %s", handler.__name__, type(event).__name__)


def publish(event, background_tasks: Optional[BackgroundTasks] = None) -> None:
    """Hand ``event`` to every subscribed handler.

    With ``background_tasks`` the handlers run after the response is sent,
    otherwise they run immediately.
    """
    for handler in _handlers.get(type(event), []):
        if background_tasks is not None:
            background_tasks.add_task(_deliver, handler, event)
        else:
            _deliver(handler, event)


def low_stock_event(adjustment, threshold: Optional[int] = None) -> Optional[LowStockDetected]:
    """Return an event when ``adjustment`` took stock from >= threshold to below it."""
    threshold = settings.LOW_STOCK_THRESHOLD if threshold is None else threshold
    if adjustment.previous_stock >= threshold > adjustment.new_stock:
        return LowStockDetected(
            store_id=adjustment.store_id,
            product_id=adjustment.product_id,
            product_name=adjustment.name,
            stock=adjustment.new_stock,
            threshold=threshold,
        )
    return None


def publish_low_stock(adjustments, background_tasks: Optional[BackgroundTasks] = None) -> int:
    published = 0
    for adjustment in adjustments:
        event = low_stock_event(adjustment)
        if event is not None:
            publish(event, background_tasks)
            published += 1
    return published
