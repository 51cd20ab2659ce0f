"""
Route modules for the API.

Each module exports a FastAPI APIRouter with endpoints
for a specific domain/feature.
"""

from api.routes import cart
from api.routes import categories
from api.routes import health
from api.routes import products

__all__ = ["cart", "categories", "health", "products"]
