"""Product normalization.

Two independent sources, one canonical record:
- schema.org structured data embedded in the page
- the storefront's per-product JSON resource
"""

from .base import Brand, Offer, Product
from .extractor import ProductExtractor
from .storefront import product_from_storefront_payload, storefront_product_url
from .structured_data import extract_structured_data_product

__all__ = [
    # Records
    "Brand",
    "Offer",
    "Product",
    # Extraction
    "ProductExtractor",
    "extract_structured_data_product",
    "product_from_storefront_payload",
    "storefront_product_url",
]
