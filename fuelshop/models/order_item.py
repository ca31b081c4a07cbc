"""Order Item model."""
from sqlalchemy import Column, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from fuelshop.database import Base, IdType


class OrderItem(Base):
    """One cart line frozen into an order."""

    __tablename__ = 'order_item'

    id = Column(IdType, primary_key=True, autoincrement=True)
    order_id = Column(IdType, ForeignKey('orders.id'), nullable=False, index=True)
    product_id = Column(IdType, ForeignKey('product.id'), nullable=False)
    quantity = Column(Numeric(14, 6), nullable=False)
    price_at_order = Column(Numeric(10, 2), nullable=False)
    line_total = Column(Numeric(12, 2), nullable=False)

    # Relationships
    order = relationship('Order', back_populates='items')
    product = relationship('Product')

    def to_dict(self):
        return {
            'product_id': self.product_id,
            'product_name': self.product.name if self.product else None,
            'quantity': str(self.quantity),
            'price_at_order': str(self.price_at_order),
            'line_total': str(self.line_total),
        }

    def __repr__(self):
        return f"<OrderItem(id={self.id}, product_id={self.product_id}, quantity={self.quantity})>"
