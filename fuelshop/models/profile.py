"""Profile model - storefront customers with email/password authentication."""
from sqlalchemy import Column, String, Boolean, DateTime, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from werkzeug.security import generate_password_hash, check_password_hash
from fuelshop.database import Base, IdType


class ProfileRole:
    """Role values stored on a profile."""
    CUSTOMER = 'customer'
    ADMIN = 'admin'


class Profile(Base):
    """Customer account plus the delivery details shown on the profile screen."""

    __tablename__ = 'profile'

    id = Column(IdType, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(200), nullable=True)
    phone_number = Column(String(40), nullable=True)
    address = Column(Text, nullable=True)
    role = Column(String(20), nullable=False, default=ProfileRole.CUSTOMER)
    active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    orders = relationship('Order', back_populates='user', order_by='Order.created_at.desc()')

    def set_password(self, password):
        """Set password hash."""
        self.password_hash = generate_password_hash(password, method='scrypt')

    def check_password(self, password):
        """Check password against hash."""
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'full_name': self.full_name or '',
            'phone_number': self.phone_number or '',
            'address': self.address or '',
            'role': self.role,
        }

    def __repr__(self):
        return f"<Profile(id={self.id}, email='{self.email}', role='{self.role}')>"
