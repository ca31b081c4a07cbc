"""Order model."""
from sqlalchemy import Column, String, Numeric, DateTime, Text, Enum, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from fuelshop.database import Base, IdType
import enum


class OrderStatus(enum.Enum):
    """Delivery order lifecycle."""
    PENDING = "Pending"
    PROCESSING = "Processing"
    OUT_FOR_DELIVERY = "Out for Delivery"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class PaymentMethod(enum.Enum):
    """Accepted payment methods."""
    CASH_ON_DELIVERY = "Cash on Delivery"


def normalize_payment_method(value) -> PaymentMethod:
    """
    Normalize a payment method value coming from a form or JSON body.

    Args:
        value: None, PaymentMethod, enum name ('CASH_ON_DELIVERY') or label
            ('Cash on Delivery'), case-insensitive

    Returns:
        PaymentMethod (Cash on Delivery when value is None or blank)

    Raises:
        ValueError: If value is not a known method
    """
    if value is None:
        return PaymentMethod.CASH_ON_DELIVERY

    if isinstance(value, PaymentMethod):
        return value

    normalized = str(value).strip()
    if not normalized:
        return PaymentMethod.CASH_ON_DELIVERY

    for method in PaymentMethod:
        if normalized.upper() == method.name or normalized.lower() == method.value.lower():
            return method

    raise ValueError(f"Invalid payment method: {value}")


class Order(Base):
    """Delivery order placed from the storefront cart."""

    __tablename__ = 'orders'

    id = Column(IdType, primary_key=True, autoincrement=True)
    user_id = Column(IdType, ForeignKey('profile.id'), nullable=False, index=True)
    subtotal = Column(Numeric(12, 2), nullable=False)
    delivery_fee = Column(Numeric(10, 2), nullable=False, default=0)
    total_amount = Column(Numeric(12, 2), nullable=False)
    delivery_address = Column(Text, nullable=False)
    special_instructions = Column(Text, nullable=True)
    payment_method = Column(String(40), nullable=False, default=PaymentMethod.CASH_ON_DELIVERY.value)
    status = Column(Enum(OrderStatus, name='order_status'), nullable=False, default=OrderStatus.PENDING)

    # Prevents duplicate orders on double-submit
    idempotency_key = Column(String(64), unique=True, nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    # Relationships
    user = relationship('Profile', back_populates='orders')
    items = relationship('OrderItem', back_populates='order', cascade='all, delete-orphan')

    def to_dict(self):
        return {
            'id': self.id,
            'subtotal': str(self.subtotal),
            'delivery_fee': str(self.delivery_fee),
            'total_amount': str(self.total_amount),
            'delivery_address': self.delivery_address,
            'special_instructions': self.special_instructions,
            'payment_method': self.payment_method,
            'status': self.status.value,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'items': [item.to_dict() for item in self.items],
        }

    def __repr__(self):
        return f"<Order(id={self.id}, total={self.total_amount}, status={self.status.value})>"
