"""
Flask CLI commands.

Commands:
- flask init-db: Create the database tables
- flask seed-products: Load the starter fuel & lubricant catalog
"""

import click
from decimal import Decimal
from fuelshop.database import create_all, get_session
from fuelshop.models import Product

STARTER_CATALOG = [
    # name, category, unit, price, stock
    ('Unleaded 91', 'Fuel', 'Liter', Decimal('60.00'), None),
    ('Premium 95', 'Fuel', 'Liter', Decimal('65.50'), None),
    ('Diesel', 'Fuel', 'Liter', Decimal('57.25'), None),
    ('4T Motor Oil 1L', 'Motor Oil', 'Bottle', Decimal('280.00'), 40),
    ('2T Motor Oil 1L', 'Motor Oil', 'Bottle', Decimal('240.00'), 40),
    ('Fully Synthetic 5W-30 4L', 'Engine Oil', 'Gallon', Decimal('1850.00'), 15),
    ('Multi-purpose Grease 500g', 'Other Lubricant', 'Can', Decimal('195.00'), 25),
]


def seed_products(session) -> int:
    """Insert starter products that are not present yet. Returns rows added."""
    added = 0
    for name, category, unit, price, stock in STARTER_CATALOG:
        if session.query(Product).filter_by(name=name).first():
            continue
        session.add(Product(
            name=name,
            category=category,
            unit=unit,
            current_price=price,
            stock_quantity=stock,
            is_active=True
        ))
        added += 1
    session.commit()
    return added


def init_cli_commands(app):
    """Register CLI commands with Flask app."""

    @app.cli.command('init-db')
    def init_db_command():
        """Create all tables."""
        create_all()
        click.echo(click.style('Database tables created.', fg='green'))

    @app.cli.command('seed-products')
    def seed_products_command():
        """Load the starter catalog."""
        session = get_session()
        try:
            added = seed_products(session)
        except Exception as e:
            session.rollback()
            click.echo(click.style(f'Error seeding products: {str(e)}', fg='red'))
            raise click.Abort()
        click.echo(click.style(f'{added} product(s) added.', fg='green'))
