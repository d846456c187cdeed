"""
Admin dashboard schemas
"""
from pydantic import BaseModel


class DashboardStats(BaseModel):
    total_products: int
    total_categories: int
    total_enquiries: int
    low_stock_count: int
    total_views: int
    low_stock_threshold: int
