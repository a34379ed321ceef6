# schemas/reports.py
from typing import List
from pydantic import BaseModel

# Dashboard summary of one store
class StatsSummary(BaseModel):
    total_products: int
    total_stock: int
    low_stock_products: int
    out_of_stock_products: int
    inventory_value: float
    potential_profit: float
    total_revenue: float
    total_sales: int
    pending_orders: int
    customers: int

class MonthlySales(BaseModel):
    month: str
    sales_count: int
    revenue: float

class PredictedRevenue(BaseModel):
    month: str
    predicted_revenue: float

class MonthlySalesResponse(BaseModel):
    data: List[MonthlySales]
    prediction: List[PredictedRevenue]

# Schema for top selling products
class TopProduct(BaseModel):
    product_id: str
    product_name: str
    total_quantity_sold: int

class TopProductsResponse(BaseModel):
    data: List[TopProduct]
