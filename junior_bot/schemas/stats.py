from pydantic import BaseModel

class ProductSold(BaseModel):
    product: str
    quantity: int
    total: float

class StatsRead(BaseModel):
    total_conversations: int
    total_sales: int
    cart_recovery: int
    response_time_avg: float
    conversion_rate: float
    total_revenue: float
    revenue_growth: float
    products_sold: list[ProductSold]
