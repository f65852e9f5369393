"""
Derived-field reconciliation for fuel entries.

The entry form links three numbers: unit price (P), volume (V) and total
cost (C). Editing one of them recomputes another so that C == round(P * V)
holds, with the unit price acting as the anchor:

* editing V recomputes C
* editing C recomputes V
* editing P recomputes C when V is filled in, otherwise V from C

Nothing here raises on bad input. Missing or unusable numbers leave the
dependent field untouched.
"""
from __future__ import annotations

import enum
import math
from dataclasses import dataclass, replace
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional, Tuple


class Field(str, enum.Enum):
    PRICE = "price"
    VOLUME = "volume"
    COST = "cost"


class EntryValidationError(ValueError):
    """Raised when a fuel entry cannot be completed at submission time."""


@dataclass(frozen=True)
class FormState:
    price: Optional[float] = None
    volume: Optional[float] = None
    cost: Optional[float] = None


def parse_number(value: Any) -> Optional[float]:
    """Return ``value`` as a finite float, or None when it is empty or not a number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def round_currency(amount: float) -> int:
    # Half-up, so 0.5 currency units always round away from zero
    return int(Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def round2(amount: float) -> float:
    return float(Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def cost_for(price: float, volume: float) -> int:
    return round_currency(price * volume)


def volume_for(price: float, cost: float) -> float:
    return round2(cost / price)


def _usable_price(price: Optional[float]) -> bool:
    return price is not None and price > 0


def _usable_quantity(number: Optional[float]) -> bool:
    return number is not None and number >= 0


def reconcile(field: Field, value: Any, state: FormState) -> FormState:
    """
    Apply an edit of ``field`` to ``state`` and return the reconciled state.

    The edited field always takes the new value (None when it was cleared).
    """
    field = Field(field)
    number = parse_number(value)

    if field is Field.VOLUME:
        new_state = replace(state, volume=number)
        if _usable_quantity(number) and _usable_price(state.price):
            new_state = replace(new_state, cost=cost_for(state.price, number))
        return new_state

    if field is Field.COST:
        new_state = replace(state, cost=number)
        if _usable_quantity(number) and _usable_price(state.price):
            new_state = replace(new_state, volume=volume_for(state.price, number))
        return new_state

    new_state = replace(state, price=number)
    if not _usable_price(number):
        return new_state
    if _usable_quantity(state.volume):
        return replace(new_state, cost=cost_for(number, state.volume))
    if _usable_quantity(state.cost):
        return replace(new_state, volume=volume_for(number, state.cost))
    return new_state


def complete_entry(
    price: Any,
    volume: Any = None,
    cost: Any = None,
    prefer: Field = Field.VOLUME,
) -> Tuple[int, float, int]:
    """
    Validate a submitted entry and fill in whichever of volume/cost is missing.

    Returns ``(price, volume, cost)``. When both volume and cost are given the
    ``prefer`` field is kept and the other one is derived from it.
    """
    p = parse_number(price)
    v = parse_number(volume)
    c = parse_number(cost)

    if p is None:
        raise EntryValidationError("price_per_liter is required")
    if p <= 0 or round_currency(p) <= 0:
        raise EntryValidationError("price_per_liter must be positive")
    p = round_currency(p)
    if v is None and c is None:
        raise EntryValidationError("either fuel_amount or total_cost is required")
    if (v is not None and v < 0) or (c is not None and c < 0):
        raise EntryValidationError("fuel_amount and total_cost must not be negative")

    if v is not None and (c is None or Field(prefer) is not Field.COST):
        return p, v, cost_for(p, v)
    return p, volume_for(p, c), round_currency(c)
