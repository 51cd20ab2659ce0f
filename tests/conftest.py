"""
Pytest configuration and shared fixtures for the storefront tests.
"""
import copy
import os
import sys
import time
from typing import Any, AsyncGenerator, Callable, Dict, List, Optional

import pytest
from httpx import ASGITransport, AsyncClient

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), "src"))

# Load environment variables, then make sure settings can be built offline
from dotenv import load_dotenv
load_dotenv(os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env"))

TEST_JWT_SECRET = "test-jwt-secret-for-storefront-tests"

os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", TEST_JWT_SECRET)


# ============================================================================
# Fake Supabase
# ============================================================================

def _lookup(row: Dict[str, Any], column: str) -> Any:
    """Resolve "category.slug" style columns through embedded rows."""
    value: Any = row
    for part in column.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


def _parse_literal(raw: str) -> Any:
    if raw in ("true", "false"):
        return raw == "true"
    if raw == "null":
        return None
    try:
        return float(raw)
    except ValueError:
        return raw


_OPERATORS: Dict[str, Callable[[Any, Any], bool]] = {
    "eq": lambda a, b: a == b,
    "neq": lambda a, b: a != b,
    "gt": lambda a, b: a is not None and a > b,
    "gte": lambda a, b: a is not None and a >= b,
    "lt": lambda a, b: a is not None and a < b,
    "lte": lambda a, b: a is not None and a <= b,
}


class FakeResponse:
    def __init__(self, data: List[Dict[str, Any]]):
        self.data = data


class FakeQuery:
    """The subset of the postgrest query builder the storefront uses."""

    def __init__(self, client: "FakeSupabaseClient", table: str):
        self._client = client
        self._table = table
        self._filters: List[Callable[[Dict[str, Any]], bool]] = []
        self._orders: List[tuple] = []
        self._limit: Optional[int] = None
        self._insert: Optional[Dict[str, Any]] = None
        self.columns = "*"

    def select(self, columns: str = "*") -> "FakeQuery":
        self.columns = columns
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self._filters.append(lambda row: _lookup(row, column) == value)
        return self

    def neq(self, column: str, value: Any) -> "FakeQuery":
        self._filters.append(lambda row: _lookup(row, column) != value)
        return self

    def or_(self, filters: str) -> "FakeQuery":
        clauses = []
        for clause in filters.split(","):
            column, op, raw = clause.split(".", 2)
            clauses.append((column, _OPERATORS[op], _parse_literal(raw)))
        self._filters.append(
            lambda row: any(op(_lookup(row, column), value) for column, op, value in clauses)
        )
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self._orders.append((column, desc))
        return self

    def limit(self, size: int) -> "FakeQuery":
        self._limit = size
        return self

    def insert(self, payload: Dict[str, Any]) -> "FakeQuery":
        self._insert = payload
        return self

    def execute(self) -> FakeResponse:
        self._client.executed.append(self)
        if self._client.error is not None:
            raise self._client.error

        if self._insert is not None:
            row = dict(self._insert, id=f"{self._table}-{len(self._client.inserted) + 1}")
            self._client.inserted.append((self._table, row))
            return FakeResponse([row])

        rows = [r for r in self._client.tables.get(self._table, []) if all(f(r) for f in self._filters)]
        # Apply orderings last-to-first so the first one wins (stable sort)
        for column, desc in reversed(self._orders):
            if desc:
                rows.sort(key=lambda r: (_lookup(r, column) is not None, _lookup(r, column)), reverse=True)
            else:
                rows.sort(key=lambda r: (_lookup(r, column) is None, _lookup(r, column)))
        if self._limit is not None:
            rows = rows[:self._limit]
        return FakeResponse(copy.deepcopy(rows))


class FakeSupabaseClient:
    """In-memory stand-in for supabase.Client."""

    def __init__(self, tables: Optional[Dict[str, List[Dict[str, Any]]]] = None,
                 error: Optional[Exception] = None):
        self.tables = tables or {}
        self.error = error
        self.executed: List[FakeQuery] = []
        self.inserted: List[tuple] = []

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)


# ============================================================================
# Fixtures: Test Data Factories
# ============================================================================

CATEGORIES = {
    "c1": {"name": "Men's T-Shirts", "slug": "mens-t-shirts"},
    "c2": {"name": "Women's Leggings", "slug": "womens-leggings"},
}


def make_product_row(
    product_id: str,
    name: str = "Test Product",
    category_id: Optional[str] = "c1",
    **overrides: Any,
) -> Dict[str, Any]:
    """A products row as returned by the joined select."""
    row = {
        "id": product_id,
        "name": name,
        "description": None,
        "category_id": category_id,
        "subcategory": None,
        "price": 499,
        "original_price": None,
        "sku": f"SKU-{product_id}",
        "slug": f"product-{product_id}",
        "is_active": True,
        "is_hot_sale": False,
        "rating": 0,
        "review_count": 0,
        "created_at": "2024-03-01T00:00:00+00:00",
        "updated_at": "2024-03-01T00:00:00+00:00",
        "category": CATEGORIES.get(category_id) if category_id else None,
        "images": [],
        "variants": [],
    }
    row.update(overrides)
    return row


@pytest.fixture
def product_row() -> Callable[..., Dict[str, Any]]:
    """Factory for product rows."""
    return make_product_row


@pytest.fixture
def catalog_rows() -> List[Dict[str, Any]]:
    """A small mixed catalog: four active t-shirts/leggings plus one inactive product."""
    return [
        make_product_row(
            "p1", "Classic Round Neck Tee", "c1",
            description="Combed cotton round neck t-shirt",
            slug="classic-round-neck-tee", is_hot_sale=True, rating=5, price=499,
            created_at="2024-03-01T00:00:00+00:00",
            images=[
                {"id": "i2", "image_url": "https://cdn.test/p1-back.jpg", "is_primary": False, "sort_order": 1},
                {"id": "i1", "image_url": "https://cdn.test/p1-front.jpg", "is_primary": True, "sort_order": 0},
            ],
            variants=[
                {"id": "v1", "size": "M", "color_name": "Black", "color_code": "#000000",
                 "stock_quantity": 0, "price_adjustment": 0, "is_active": True},
                {"id": "v2", "size": "L", "color_name": "Black", "color_code": "#000000",
                 "stock_quantity": 4, "price_adjustment": 0, "is_active": True},
                {"id": "v3", "size": "M", "color_name": "White", "color_code": "#ffffff",
                 "stock_quantity": 2, "price_adjustment": 0, "is_active": True},
            ],
        ),
        make_product_row(
            "p2", "Pique Polo Shirt", "c1",
            description="Breathable pique cotton polo",
            slug="pique-polo-shirt", rating=3, price=899,
            created_at="2024-03-02T00:00:00+00:00",
        ),
        make_product_row(
            "p3", "V-Neck Tee", "c1",
            description=None,
            slug="v-neck-tee", rating=4, price=549,
            created_at="2024-03-03T00:00:00+00:00",
        ),
        make_product_row(
            "p4", "Full Length Leggings", "c2",
            description="Stretch cotton leggings",
            slug="full-length-leggings", rating=4.5, price=399,
            created_at="2024-03-04T00:00:00+00:00",
        ),
        make_product_row(
            "p5", "Old Polo Shorts", "c1",
            slug="old-polo-shorts", is_active=False, is_hot_sale=True, rating=5,
            created_at="2024-03-05T00:00:00+00:00",
        ),
    ]


@pytest.fixture
def fake_supabase(catalog_rows) -> FakeSupabaseClient:
    """Fake Supabase client loaded with the sample catalog."""
    return FakeSupabaseClient(tables={"products": catalog_rows})


@pytest.fixture
def failing_supabase() -> FakeSupabaseClient:
    """Fake Supabase client whose every request fails."""
    return FakeSupabaseClient(error=ConnectionError("catalog unreachable"))


@pytest.fixture
def make_fake_supabase() -> Callable[..., FakeSupabaseClient]:
    return FakeSupabaseClient


# ============================================================================
# Fixtures: Services
# ============================================================================

@pytest.fixture
def repository(fake_supabase):
    from catalog.repository import ProductRepository
    return ProductRepository(fake_supabase)


@pytest.fixture
def storefront(repository):
    from services.storefront import StorefrontService
    return StorefrontService(repository)


# ============================================================================
# Fixtures: FastAPI Test Client
# ============================================================================

@pytest.fixture
def test_settings():
    from config.settings import get_settings_for_testing
    return get_settings_for_testing()


@pytest.fixture
def app(fake_supabase, test_settings):
    """FastAPI application wired to the fake Supabase client."""
    from api.app import create_app
    from api.dependencies import get_db, get_db_optional
    from config.settings import get_settings

    application = create_app()
    application.dependency_overrides[get_db] = lambda: fake_supabase
    application.dependency_overrides[get_db_optional] = lambda: fake_supabase
    application.dependency_overrides[get_settings] = lambda: test_settings
    return application


@pytest.fixture
async def async_client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ============================================================================
# JWT Token Generation
# ============================================================================

def generate_test_jwt(user_id: str = "test-user-001", exp_hours: int = 24,
                      secret: str = TEST_JWT_SECRET) -> str:
    """Generate a Supabase-style access token signed with the test secret."""
    import jwt

    now = int(time.time())
    payload = {
        "sub": user_id,
        "aud": "authenticated",
        "role": "authenticated",
        "email": f"{user_id}@test.com",
        "exp": now + (exp_hours * 3600),
        "iat": now,
        "is_anonymous": False,
    }
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def auth_headers() -> dict:
    """Auth headers with a valid Bearer token."""
    return {"Authorization": f"Bearer {generate_test_jwt()}"}


@pytest.fixture
def expired_auth_headers() -> dict:
    return {"Authorization": f"Bearer {generate_test_jwt(exp_hours=-1)}"}


@pytest.fixture
def make_auth_headers() -> Callable[..., dict]:
    """Factory for auth headers, e.g. signed with a different secret."""
    def _make(**kwargs: Any) -> dict:
        return {"Authorization": f"Bearer {generate_test_jwt(**kwargs)}"}
    return _make
