# backend/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

from config import settings
from database import init_db
from utils.errors import InventoryError, InsufficientStock

load_dotenv()

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Router imports
from routes.auth import router as auth_router
from routes.products import router as products_router
from routes.stock import router as stock_router
from routes.sales import router as sales_router
from routes.suppliers import router as suppliers_router
from routes.orders import router as orders_router
from routes.notifications import router as notifications_router
from routes.stats import router as stats_router
from routes.logs import router as logs_router

# Subscribes the low-stock notifier to inventory events
import utils.notifier  # noqa: F401


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Database ready")
    yield


app = FastAPI(title="Retail Inventory API", version="1.0.0", lifespan=lifespan)

# CORS Configuration
origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
if settings.FRONTEND_URL and settings.FRONTEND_URL not in origins:
    origins.append(settings.FRONTEND_URL)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InventoryError)
async def inventory_error_handler(request: Request, exc: InventoryError):
    body = {"detail": exc.message, "error": type(exc).__name__}
    if isinstance(exc, InsufficientStock):
        body.update(product_name=exc.product_name, requested=exc.requested, available=exc.available)
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=body)


# Router registration
app.include_router(auth_router)
app.include_router(products_router)
app.include_router(stock_router)
app.include_router(sales_router)
app.include_router(suppliers_router)
app.include_router(orders_router)
app.include_router(notifications_router)
app.include_router(stats_router)
app.include_router(logs_router)

@app.get("/")
def read_root():
    return {"message": "Retail Inventory API is running"}
