from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, slots=True)
class UsageItem:
    """
    UsageItem represents a single line of a billing
    period usage report.
    """

    product: "str"
    sku: "str"
    gross_quantity: "float"
    discount_quantity: "float"
    net_quantity: "float"
    gross_amount: "float"
    discount_amount: "float"
    # amount actually billed after discounts
    net_amount: "float"
    price_per_unit: "float"
    unit_type: "str"

    @classmethod
    def from_api(cls, data: "dict") -> "UsageItem":
        return cls(
            product=data.get("product") or "unknown",
            sku=data.get("sku") or "unknown",
            gross_quantity=data.get("grossQuantity") or 0,
            discount_quantity=data.get("discountQuantity") or 0,
            net_quantity=data.get("netQuantity") or 0,
            gross_amount=data.get("grossAmount") or 0.0,
            discount_amount=data.get("discountAmount") or 0.0,
            net_amount=data.get("netAmount") or 0.0,
            price_per_unit=data.get("pricePerUnit") or 0.0,
            unit_type=data.get("unitType") or "",
        )


@dataclass(frozen=True, slots=True)
class UsageReport:
    """
    UsageReport is the billing usage summary of one user for
    one billing period.
    """

    user: "str"
    year: "int | None"
    month: "int | None"
    items: "tuple[UsageItem, ...]" = ()

    @classmethod
    def from_api(cls, data: "dict") -> "UsageReport":
        period = data.get("timePeriod") or {}
        return cls(
            user=data.get("user") or "",
            year=period.get("year"),
            month=period.get("month"),
            items=tuple(UsageItem.from_api(i) for i in data.get("usageItems") or []),
        )

    @property
    def total(self) -> "float":
        return sum((item.net_amount for item in self.items), 0.0)


@dataclass(frozen=True, slots=True)
class FetchOutcome:
    """
    FetchOutcome is what a single conditional fetch produced.

    total is None when the server answered "not modified", in
    which case validator is the one that was sent.
    """

    total: "float | None"
    validator: "str | None"

    @property
    def not_modified(self) -> "bool":
        return self.total is None


@dataclass(frozen=True, slots=True)
class CacheState:
    """
    CacheState holds the last known total and the validator of
    the report it was computed from. A validator is only kept
    alongside a total.
    """

    total: "float | None" = None
    validator: "str | None" = None

    def __post_init__(self) -> "None":
        if self.validator is not None and self.total is None:
            raise ValueError("validator requires a cached total")

    @property
    def empty(self) -> "bool":
        return self.total is None


class SeverityTier(Enum):
    NORMAL = "normal"
    WARNING = "warning"
    ERROR = "error"
