"""SQLAlchemy models for the content seeder."""

from seeder.models.term import Term
from seeder.models.user import User, RoleType
from seeder.models.post import Post, post_terms
from seeder.models.product import Product, product_categories, product_tags, STOCK_STATUSES
from seeder.models.attribute import Attribute, ProductAttribute, attribute_taxonomy
from seeder.models.review import ProductReview

__all__ = [
    "Term",
    "User",
    "RoleType",
    "Post",
    "post_terms",
    "Product",
    "product_categories",
    "product_tags",
    "STOCK_STATUSES",
    "Attribute",
    "ProductAttribute",
    "attribute_taxonomy",
    "ProductReview",
]
