"""Product model."""
from sqlalchemy import Column, String, Boolean, Numeric, DateTime, Integer, Text
from sqlalchemy.sql import func
from fuelshop.database import Base, IdType
from fuelshop.models.category import ProductCategory


class Product(Base):
    """Catalog product (fuel grade or lubricant)."""

    __tablename__ = 'product'

    id = Column(IdType, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(50), nullable=False, index=True)  # e.g. 'Fuel', 'Motor Oil'
    unit = Column(String(30), nullable=False)  # display label: 'Liter', 'Bottle'
    current_price = Column(Numeric(10, 2), nullable=False)
    stock_quantity = Column(Integer, nullable=True)  # NULL = availability not gated
    image_url = Column(String(255), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', category='{self.category}')>"

    @property
    def category_kind(self) -> ProductCategory:
        """Category label resolved to its variant."""
        return ProductCategory.from_label(self.category)

    @property
    def is_fuel(self) -> bool:
        return self.category_kind is ProductCategory.FUEL

    @property
    def gates_stock(self) -> bool:
        return self.stock_quantity is not None

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'category': self.category,
            'unit': self.unit,
            'current_price': str(self.current_price),
            'stock_quantity': self.stock_quantity,
            'image_url': self.image_url,
        }
