"""Product categories and the unit semantics attached to each one."""
import enum


class UnitKind(enum.Enum):
    """How quantities of a category are measured."""
    VOLUME = "volume"  # continuous, e.g. liters of fuel
    COUNT = "count"    # discrete, e.g. bottles or cans


class ProductCategory(enum.Enum):
    """
    Closed set of storefront categories.

    The catalog stores a free-text label; `from_label` maps it onto one of
    these variants once, so callers ask the variant about its units instead
    of comparing strings.
    """
    FUEL = "Fuel"
    MOTOR_OIL = "Motor Oil"
    ENGINE_OIL = "Engine Oil"
    OTHER_LUBRICANT = "Other Lubricant"

    @property
    def unit_kind(self) -> UnitKind:
        if self is ProductCategory.FUEL:
            return UnitKind.VOLUME
        return UnitKind.COUNT

    @property
    def is_continuous(self) -> bool:
        return self.unit_kind is UnitKind.VOLUME

    @property
    def allows_amount_entry(self) -> bool:
        """Only fuel can be bought as "give me this much money worth"."""
        return self is ProductCategory.FUEL

    @classmethod
    def from_label(cls, label) -> 'ProductCategory':
        """Map a stored label (case/spacing-insensitive) to a variant."""
        if isinstance(label, cls):
            return label
        normalized = ' '.join(str(label or '').split()).lower()
        for member in cls:
            if member.value.lower() == normalized:
                return member
        return cls.OTHER_LUBRICANT
