import pytest
from decimal import Decimal
from types import SimpleNamespace
import uuid

from config import TestConfig
from fuelshop import create_app
from fuelshop.database import create_all, drop_all, get_session
from fuelshop.models import Product, Profile


@pytest.fixture(scope='function')
def app():
    """Create application instance with a fresh in-memory database."""
    app = create_app(TestConfig)
    with app.app_context():
        create_all()
        yield app
        get_session().remove()
        drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def session(app):
    """Database session for testing."""
    session = get_session()
    yield session
    session.rollback()


@pytest.fixture(scope='function')
def fuel_product(session):
    """Unleaded fuel at 60.00 per liter, stock not tracked."""
    product = Product(
        name='Unleaded 91',
        category='Fuel',
        unit='Liter',
        current_price=Decimal('60.00'),
        stock_quantity=None,
        is_active=True
    )
    session.add(product)
    session.commit()
    session.refresh(product)
    return product


@pytest.fixture(scope='function')
def oil_product(session):
    """Motor oil sold by the bottle with 5 in stock."""
    product = Product(
        name='4T Motor Oil 1L',
        category='Motor Oil',
        unit='Bottle',
        current_price=Decimal('280.00'),
        stock_quantity=5,
        is_active=True
    )
    session.add(product)
    session.commit()
    session.refresh(product)
    return product


@pytest.fixture(scope='function')
def inactive_product(session):
    product = Product(
        name='Discontinued Grease',
        category='Other Lubricant',
        unit='Can',
        current_price=Decimal('150.00'),
        is_active=False
    )
    session.add(product)
    session.commit()
    session.refresh(product)
    return product


@pytest.fixture(scope='function')
def customer(session):
    """Registered customer with password 'password123'."""
    suffix = str(uuid.uuid4())[:8]
    profile = Profile(
        email=f'customer-{suffix}@test.com',
        full_name='Juan Dela Cruz',
        phone_number='09171234567',
        address='12 Rizal St., San Pedro',
        active=True
    )
    profile.set_password('password123')
    session.add(profile)
    session.commit()
    session.refresh(profile)
    return profile


@pytest.fixture(scope='function')
def authenticated_client(client, customer):
    """Client logged in as `customer` (opens the customer's cart)."""
    response = client.post('/login', json={
        'email': customer.email,
        'password': 'password123'
    })
    assert response.status_code == 200
    return client


@pytest.fixture
def fuel():
    """Plain stand-in for a fuel product (no database needed)."""
    return SimpleNamespace(
        id=1, name='Unleaded 91', category='Fuel', unit='Liter',
        current_price=Decimal('60.00')
    )


@pytest.fixture
def motor_oil():
    return SimpleNamespace(
        id=2, name='4T Motor Oil 1L', category='Motor Oil', unit='Bottle',
        current_price=Decimal('280.00')
    )
