"""Models package - exports all SQLAlchemy models."""
from fuelshop.models.category import ProductCategory, UnitKind
from fuelshop.models.profile import Profile, ProfileRole
from fuelshop.models.product import Product
from fuelshop.models.order import Order, OrderStatus, PaymentMethod, normalize_payment_method
from fuelshop.models.order_item import OrderItem

__all__ = [
    'ProductCategory', 'UnitKind',
    'Profile', 'ProfileRole',
    'Product',
    'Order', 'OrderStatus', 'PaymentMethod', 'normalize_payment_method',
    'OrderItem',
]
