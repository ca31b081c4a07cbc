"""
Unit tests for the in-memory cart ledger.
"""

import pytest
from decimal import Decimal
from types import SimpleNamespace

from fuelshop.models import ProductCategory
from fuelshop.services.cart_ledger import CartLedger, CartLineItem


def _product(pid, price='100.00', category='Motor Oil', name=None):
    return SimpleNamespace(
        id=pid, name=name or f'Product {pid}', category=category,
        unit='Bottle', current_price=Decimal(price)
    )


class TestAddItem:
    """Tests for merge-by-product-id semantics."""

    def test_add_new_item_appends_line(self, fuel):
        ledger = CartLedger()
        items = ledger.add_item(fuel, Decimal('5'), Decimal('300.00'))

        assert len(items) == 1
        item = items[0]
        assert item.product_id == fuel.id
        assert item.name == 'Unleaded 91'
        assert item.category is ProductCategory.FUEL
        assert item.unit_price == Decimal('60.00')
        assert item.quantity == Decimal('5')
        assert item.line_total == Decimal('300.00')

    def test_repeated_adds_merge_into_one_line(self, fuel):
        """Scenario: 5 L for 300 then 2 L for 120 -> 7 L for 420."""
        ledger = CartLedger()
        ledger.add_item(fuel, Decimal('5'), Decimal('300.00'))
        ledger.add_item(fuel, Decimal('2'), Decimal('120.00'))

        assert len(ledger.items) == 1
        assert ledger.items[0].quantity == Decimal('7')
        assert ledger.items[0].line_total == Decimal('420.00')
        assert ledger.get_total() == Decimal('420.00')

    def test_merge_interleaved_with_other_products(self, fuel, motor_oil):
        ledger = CartLedger()
        ledger.add_item(fuel, Decimal('1.5'), Decimal('90.00'))
        ledger.add_item(motor_oil, Decimal('2'), Decimal('560.00'))
        ledger.add_item(fuel, Decimal('0.5'), Decimal('30.00'))

        fuel_line = ledger.get(fuel.id)
        assert fuel_line.quantity == Decimal('2.0')
        assert fuel_line.line_total == Decimal('120.00')
        assert ledger.get(motor_oil.id).line_total == Decimal('560.00')

    def test_merge_keeps_first_price_snapshot(self, fuel):
        """A later price change does not rewrite the existing line."""
        ledger = CartLedger()
        ledger.add_item(fuel, Decimal('1'), Decimal('60.00'))

        repriced = SimpleNamespace(**{**vars(fuel), 'current_price': Decimal('75.00'), 'name': 'Renamed'})
        ledger.add_item(repriced, Decimal('1'), Decimal('75.00'))

        line = ledger.get(fuel.id)
        assert line.unit_price == Decimal('60.00')
        assert line.name == 'Unleaded 91'
        assert line.line_total == Decimal('135.00')

    def test_line_total_not_derived_from_price(self, fuel):
        """The ledger stores the pair it is given, even if inconsistent."""
        ledger = CartLedger()
        ledger.add_item(fuel, Decimal('1'), Decimal('10.00'))

        assert ledger.get(fuel.id).line_total == Decimal('10.00')

    def test_merge_replaces_item_instead_of_mutating(self, fuel):
        ledger = CartLedger()
        ledger.add_item(fuel, Decimal('1'), Decimal('60.00'))
        before = ledger.get(fuel.id)

        ledger.add_item(fuel, Decimal('1'), Decimal('60.00'))

        assert before.quantity == Decimal('1')
        assert ledger.get(fuel.id) is not before

    def test_insertion_order_preserved_on_merge(self, fuel, motor_oil):
        ledger = CartLedger()
        ledger.add_item(fuel, Decimal('1'), Decimal('60.00'))
        ledger.add_item(motor_oil, Decimal('1'), Decimal('280.00'))
        ledger.add_item(fuel, Decimal('1'), Decimal('60.00'))

        assert [i.product_id for i in ledger.items] == [fuel.id, motor_oil.id]

    def test_listener_called_for_every_add(self, fuel):
        added = []
        ledger = CartLedger(on_item_added=added.append)

        ledger.add_item(fuel, Decimal('1'), Decimal('60.00'))
        ledger.add_item(fuel, Decimal('2'), Decimal('120.00'))

        assert len(added) == 2
        assert added[-1].quantity == Decimal('3')

    def test_line_item_is_frozen(self, fuel):
        item = CartLineItem.from_product(fuel, Decimal('1'), Decimal('60.00'))
        with pytest.raises(Exception):
            item.quantity = Decimal('99')


class TestRemoveAndClear:
    """Tests for removal isolation and clear."""

    def test_remove_only_touches_that_id(self, fuel, motor_oil):
        ledger = CartLedger()
        ledger.add_item(fuel, Decimal('5'), Decimal('300.00'))
        ledger.add_item(motor_oil, Decimal('2'), Decimal('560.00'))
        oil_line = ledger.get(motor_oil.id)

        ledger.remove_item(fuel.id)

        assert fuel.id not in ledger
        assert ledger.items == (oil_line,)
        assert ledger.get(motor_oil.id) is oil_line
        assert ledger.get_total() == Decimal('560.00')

    def test_remove_unknown_id_is_noop(self, fuel):
        ledger = CartLedger()
        ledger.add_item(fuel, Decimal('1'), Decimal('60.00'))
        before = ledger.items

        assert ledger.remove_item(999) == before

    def test_scenario_remove_last_item_empties_cart(self, fuel):
        ledger = CartLedger()
        ledger.add_item(fuel, Decimal('5'), Decimal('300.00'))
        ledger.add_item(fuel, Decimal('2'), Decimal('120.00'))

        ledger.remove_item(1)

        assert ledger.items == ()
        assert ledger.get_total() == Decimal('0')

    def test_clear_empties_from_any_state(self, fuel, motor_oil):
        ledger = CartLedger()
        ledger.add_item(fuel, Decimal('5'), Decimal('300.00'))
        ledger.add_item(motor_oil, Decimal('2'), Decimal('560.00'))

        ledger.clear()

        assert ledger.items == ()
        assert ledger.is_empty
        assert ledger.get_total() == 0

    def test_clear_on_empty_cart(self):
        ledger = CartLedger()
        ledger.clear()
        assert len(ledger) == 0


class TestTotal:
    """Tests for total consistency."""

    def test_empty_total_is_zero(self):
        assert CartLedger().get_total() == Decimal('0')

    def test_total_matches_sum_after_mixed_operations(self):
        ledger = CartLedger()
        operations = [
            ('add', _product(1, '60.00', 'Fuel'), Decimal('0.833333'), Decimal('50.00')),
            ('add', _product(2), Decimal('3'), Decimal('300.00')),
            ('add', _product(1, '60.00', 'Fuel'), Decimal('1.25'), Decimal('75.00')),
            ('remove', 2),
            ('add', _product(3), Decimal('1'), Decimal('100.00')),
            ('add', _product(2), Decimal('1'), Decimal('100.00')),
        ]
        for op in operations:
            if op[0] == 'add':
                ledger.add_item(op[1], op[2], op[3])
            else:
                ledger.remove_item(op[1])
            assert ledger.get_total() == sum((i.line_total for i in ledger.items), Decimal('0'))

        assert ledger.get_total() == Decimal('325.00')

    def test_snapshot_is_independent_of_later_changes(self, fuel):
        ledger = CartLedger()
        ledger.add_item(fuel, Decimal('5'), Decimal('300.00'))
        snapshot = ledger.snapshot()

        ledger.clear()

        assert snapshot.total == Decimal('300.00')
        assert len(snapshot.items) == 1
        assert not snapshot.is_empty


class TestRemoveSubmitted:
    """Tests for dropping the lines of a placed order."""

    def test_removes_submitted_lines_only(self, fuel, motor_oil):
        ledger = CartLedger()
        ledger.add_item(fuel, Decimal('5'), Decimal('300.00'))
        snapshot = ledger.snapshot()
        ledger.add_item(motor_oil, Decimal('1'), Decimal('280.00'))

        ledger.remove_submitted(snapshot.items)

        assert [i.product_id for i in ledger.items] == [motor_oil.id]
        assert ledger.get_total() == Decimal('280.00')

    def test_line_changed_after_snapshot_is_kept(self, fuel):
        ledger = CartLedger()
        ledger.add_item(fuel, Decimal('5'), Decimal('300.00'))
        snapshot = ledger.snapshot()
        ledger.add_item(fuel, Decimal('1'), Decimal('60.00'))

        ledger.remove_submitted(snapshot.items)

        assert ledger.get(fuel.id).quantity == Decimal('6')

    def test_line_removed_after_snapshot_is_ignored(self, fuel):
        ledger = CartLedger()
        ledger.add_item(fuel, Decimal('5'), Decimal('300.00'))
        snapshot = ledger.snapshot()
        ledger.clear()

        assert ledger.remove_submitted(snapshot.items) == ()
