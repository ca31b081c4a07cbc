"""Catalog service - read-only product queries for the storefront."""
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from fuelshop.exceptions import NotFoundError
from fuelshop.models import Product, ProductCategory


def list_active_products(session: Session, category: Optional[str] = None) -> List[Product]:
    """
    Active products ordered by category, then name.

    Args:
        session: SQLAlchemy session
        category: optional category label ('Fuel', 'motor oil', ...); matched
            case-insensitively against the stored label
    """
    query = session.query(Product).filter(Product.is_active == True)  # noqa: E712

    if category:
        query = query.filter(func.lower(Product.category) == category.strip().lower())

    return query.order_by(Product.category, Product.name).all()


def get_product(session: Session, product_id: int) -> Product:
    """Active product by id, or NotFoundError."""
    product = session.query(Product).filter(
        Product.id == product_id,
        Product.is_active == True  # noqa: E712
    ).first()

    if not product:
        raise NotFoundError('Product not found.')
    return product


def list_categories(session: Session) -> List[dict]:
    """Distinct category labels of active products with their unit semantics."""
    rows = (
        session.query(Product.category)
        .filter(Product.is_active == True)  # noqa: E712
        .distinct()
        .order_by(Product.category)
        .all()
    )
    categories = []
    for (label,) in rows:
        kind = ProductCategory.from_label(label)
        categories.append({
            'label': label,
            'kind': kind.name,
            'unit_kind': kind.unit_kind.value,
            'allows_amount_entry': kind.allows_amount_entry,
        })
    return categories
