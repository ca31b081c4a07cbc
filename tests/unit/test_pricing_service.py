"""
Unit tests for the pricing calculator.
"""

import pytest
from decimal import Decimal

from fuelshop.services.pricing_service import (
    InputMode, PricingResult, available_modes, compute, compute_for_product,
    MAX_LINE_TOTAL, MAX_QUANTITY, TOO_LARGE_MESSAGE, default_input, effective_mode,
    sanitize_input, within_limits
)


class TestCompute:

    def test_by_quantity(self):
        result = compute('5', InputMode.BY_QUANTITY, Decimal('60.00'))

        assert result.valid is True
        assert result.quantity == Decimal('5')
        assert result.line_total == Decimal('300.00')

    def test_by_amount(self):
        result = compute('300', InputMode.BY_AMOUNT, Decimal('60.00'))

        assert result.valid is True
        assert result.line_total == Decimal('300.00')
        assert result.quantity == Decimal('5.000000')

    def test_by_quantity_with_fraction(self):
        result = compute('2.5', 'quantity', '57.25')
        assert result.line_total == Decimal('143.13')  # 143.125 rounded half up

    def test_amount_to_quantity_round_trip(self):
        price = Decimal('60.00')
        by_amount = compute('50', InputMode.BY_AMOUNT, price)
        assert abs(by_amount.quantity - Decimal('50') / price) < Decimal('0.000001')

        by_quantity = compute(str(by_amount.quantity), InputMode.BY_QUANTITY, price)
        assert abs(by_quantity.line_total - Decimal('50')) <= Decimal('0.01')

    def test_round_trip_with_awkward_price(self):
        price = Decimal('65.37')
        by_amount = compute('1000', InputMode.BY_AMOUNT, price)
        by_quantity = compute(str(by_amount.quantity), InputMode.BY_QUANTITY, price)
        assert abs(by_quantity.line_total - Decimal('1000')) <= Decimal('0.01')

    @pytest.mark.parametrize('raw', [
        '', 'abc', '-5', '0', '0.0', '   ', None, '1.2.3', 'NaN', 'Infinity', '1e3',
        '1' + '0' * 30, '9' * 40 + '.5', '0.' + '0' * 40 + '1',
    ])
    @pytest.mark.parametrize('mode', [InputMode.BY_QUANTITY, InputMode.BY_AMOUNT])
    def test_invalid_inputs(self, raw, mode):
        result = compute(raw, mode, Decimal('60.00'))

        assert result.valid is False
        assert result.quantity is None
        assert result.line_total is None
        assert result.message

    @pytest.mark.parametrize('price', [Decimal('0'), Decimal('-1'), None, 'abc'])
    def test_non_positive_price_is_invalid(self, price):
        assert compute('5', InputMode.BY_AMOUNT, price).valid is False

    def test_unknown_mode_is_invalid(self):
        assert compute('5', 'gallons', Decimal('60.00')).valid is False

    def test_to_dict(self):
        assert compute('2', 'quantity', '10').to_dict() == {
            'valid': True, 'quantity': '2', 'line_total': '20.00'
        }
        assert PricingResult.invalid('nope').to_dict() == {'valid': False, 'message': 'nope'}


class TestStorableLimits:
    """Lines must fit OrderItem.quantity (14,6) and Order.subtotal (12,2)."""

    def test_oversized_input_reports_too_large(self):
        for mode in InputMode:
            result = compute('1' + '0' * 30, mode, Decimal('60.00'))
            assert result.valid is False
            assert result.message == TOO_LARGE_MESSAGE

    def test_largest_line_total_accepted(self):
        result = compute('99999999.99', InputMode.BY_AMOUNT, Decimal('60.00'))
        assert result.valid is True
        assert result.line_total == MAX_LINE_TOTAL

    def test_line_total_over_limit(self):
        assert compute('100000000', InputMode.BY_AMOUNT, Decimal('60.00')).message == TOO_LARGE_MESSAGE
        # 2,000,000 L at 60.00 = 120,000,000.00
        assert compute('2000000', InputMode.BY_QUANTITY, Decimal('60.00')).message == TOO_LARGE_MESSAGE

    def test_derived_quantity_over_limit(self):
        result = compute('9999999', InputMode.BY_AMOUNT, Decimal('0.01'))
        assert result.valid is False
        assert result.message == TOO_LARGE_MESSAGE

    def test_within_limits(self):
        assert within_limits(MAX_QUANTITY, MAX_LINE_TOTAL, MAX_LINE_TOTAL)
        assert not within_limits(Decimal('1'), Decimal('1'), MAX_LINE_TOTAL + Decimal('0.01'))


class TestSanitize:

    @pytest.mark.parametrize('raw, expected', [
        ('12a.5', '12.5'),
        ('1.2.3', '1.23'),
        ('-5', '5'),
        ('₱ 100', '100'),
        ('', ''),
        (None, ''),
        ('..5', '.5'),
    ])
    def test_sanitize(self, raw, expected):
        assert sanitize_input(raw) == expected


class TestModes:

    def test_only_fuel_offers_amount_mode(self):
        assert available_modes('Fuel') == (InputMode.BY_QUANTITY, InputMode.BY_AMOUNT)
        assert available_modes('Motor Oil') == (InputMode.BY_QUANTITY,)
        assert available_modes('Engine Oil') == (InputMode.BY_QUANTITY,)
        assert available_modes('Brake Fluid') == (InputMode.BY_QUANTITY,)

    def test_effective_mode_falls_back_to_quantity(self):
        assert effective_mode('Motor Oil', 'amount') is InputMode.BY_QUANTITY
        assert effective_mode('Fuel', 'amount') is InputMode.BY_AMOUNT
        assert effective_mode('Fuel', None) is InputMode.BY_QUANTITY

    def test_mode_switch_resets_input(self):
        assert default_input(InputMode.BY_QUANTITY) == '1'
        assert default_input(InputMode.BY_AMOUNT) == '100'
        assert default_input('amount', amount_default='500') == '500'

    def test_parse_accepts_names_and_values(self):
        assert InputMode.parse('BY_AMOUNT') is InputMode.BY_AMOUNT
        assert InputMode.parse('amount') is InputMode.BY_AMOUNT
        assert InputMode.parse('liters') is InputMode.BY_QUANTITY
        with pytest.raises(ValueError):
            InputMode.parse('bogus')


class TestComputeForProduct:

    def test_fuel_by_amount(self, fuel):
        result = compute_for_product(fuel, '300', 'amount')
        assert result.quantity == Decimal('5.000000')
        assert result.line_total == Decimal('300.00')

    def test_amount_mode_ignored_for_lubricants(self, motor_oil):
        result = compute_for_product(motor_oil, '2', 'amount')
        assert result.valid is True
        assert result.quantity == Decimal('2')
        assert result.line_total == Decimal('560.00')

    def test_fractional_bottles_rejected(self, motor_oil):
        result = compute_for_product(motor_oil, '1.5', 'quantity')
        assert result.valid is False
        assert 'whole' in result.message

    def test_fractional_liters_allowed(self, fuel):
        result = compute_for_product(fuel, '1.5', 'quantity')
        assert result.valid is True
        assert result.line_total == Decimal('90.00')

    def test_unknown_mode_reports_invalid(self, fuel):
        assert compute_for_product(fuel, '1', 'gallons').valid is False
