"""
Sample products served when the catalog cannot be read.

Only used as the degrade-to-demo-data fallback for the full listing, and
only when SAMPLE_DATA_FALLBACK is enabled.
"""

from typing import List

from catalog.models import Product


SAMPLE_PRODUCT_ROWS: List[dict] = [
    {
        "id": "1",
        "name": "Classic Round Neck T-Shirt",
        "description": "Soft combed cotton round neck t-shirt for everyday wear.",
        "category_id": "sample-mens-t-shirts",
        "subcategory": "Round Neck",
        "price": 499,
        "original_price": 799,
        "sku": "SAMPLE-TS-001",
        "slug": "classic-round-neck-t-shirt",
        "is_active": True,
        "is_hot_sale": True,
        "rating": 4.5,
        "review_count": 128,
        "created_at": "2024-01-03T00:00:00+00:00",
        "updated_at": "2024-01-03T00:00:00+00:00",
        "category": {"name": "Men's T-Shirts", "slug": "mens-t-shirts"},
        "images": [
            {
                "id": "sample-img-1",
                "image_url": "/placeholder.svg",
                "alt_text": "Classic Round Neck T-Shirt",
                "is_primary": True,
                "sort_order": 0,
            },
        ],
        "variants": [
            {"id": "sample-var-1", "size": "M", "color_name": "Black", "color_code": "#000000",
             "stock_quantity": 10, "price_adjustment": 0, "is_active": True},
            {"id": "sample-var-2", "size": "L", "color_name": "White", "color_code": "#ffffff",
             "stock_quantity": 5, "price_adjustment": 0, "is_active": True},
        ],
    },
    {
        "id": "2",
        "name": "Full Length Cotton Leggings",
        "description": "Stretchable full length leggings with a comfortable waistband.",
        "category_id": "sample-womens-leggings",
        "subcategory": "Full Length",
        "price": 399,
        "original_price": None,
        "sku": "SAMPLE-LG-002",
        "slug": "full-length-cotton-leggings",
        "is_active": True,
        "is_hot_sale": False,
        "rating": 4.2,
        "review_count": 86,
        "created_at": "2024-01-02T00:00:00+00:00",
        "updated_at": "2024-01-02T00:00:00+00:00",
        "category": {"name": "Women's Leggings", "slug": "womens-leggings"},
        "images": [
            {
                "id": "sample-img-2",
                "image_url": "/placeholder.svg",
                "alt_text": "Full Length Cotton Leggings",
                "is_primary": True,
                "sort_order": 0,
            },
        ],
        "variants": [
            {"id": "sample-var-3", "size": "Free Size", "color_name": "Navy", "color_code": "#1e3a8a",
             "stock_quantity": 20, "price_adjustment": 0, "is_active": True},
        ],
    },
    {
        "id": "3",
        "name": "Shimmer Saree Shapewear",
        "description": "Lycra blend saree shapewear with a shimmer finish.",
        "category_id": "sample-saree-shapewear",
        "subcategory": "Shimmer",
        "price": 649,
        "original_price": 899,
        "sku": "SAMPLE-SW-003",
        "slug": "shimmer-saree-shapewear",
        "is_active": True,
        "is_hot_sale": False,
        "rating": 4.0,
        "review_count": 42,
        "created_at": "2024-01-01T00:00:00+00:00",
        "updated_at": "2024-01-01T00:00:00+00:00",
        "category": {"name": "Saree Shapewear", "slug": "saree-shapewear"},
        "images": [],
        "variants": [
            {"id": "sample-var-4", "size": "M", "color_name": "Beige", "color_code": "#d6c4a8",
             "stock_quantity": 8, "price_adjustment": 0, "is_active": True},
        ],
    },
]


def sample_products() -> List[Product]:
    """Fresh Product models for the sample catalog, newest first."""
    return [Product.model_validate(row) for row in SAMPLE_PRODUCT_ROWS]
