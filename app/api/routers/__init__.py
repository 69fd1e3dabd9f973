"""
app/api/routers package marker.
"""

from app.api.routers.inventory_crawl import router as inventory_crawl_router

__all__ = ["inventory_crawl_router"]
