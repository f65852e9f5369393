"""
Pending edit buffers for stored records.

Editing a record never touches the stored copy: ``begin`` takes a snapshot,
``update`` changes the snapshot only, and the draft is either committed into
a full replacement row or discarded.
"""
from __future__ import annotations

import copy
from typing import Any, Dict, Optional

from app.utils.reconciler import Field, FormState, complete_entry, cost_for, parse_number, reconcile

IMMUTABLE_FIELDS = ("record_id", "user_id", "created_at")


class DraftClosedError(RuntimeError):
    """Raised when a committed or discarded draft is used again."""


class RecordDraft:
    def __init__(self, record: Dict[str, Any]) -> None:
        self.original = record
        self._data: Optional[Dict[str, Any]] = copy.deepcopy(record)

    @classmethod
    def begin(cls, record: Dict[str, Any], **kwargs: Any) -> "RecordDraft":
        return cls(record, **kwargs)

    @property
    def record_id(self) -> Optional[str]:
        return self.original.get("record_id")

    @property
    def is_open(self) -> bool:
        return self._data is not None

    @property
    def data(self) -> Dict[str, Any]:
        if self._data is None:
            raise DraftClosedError(f"Draft for {self.record_id} is closed")
        return self._data

    def update(self, **changes: Any) -> "RecordDraft":
        data = self.data
        for key, value in changes.items():
            if key in IMMUTABLE_FIELDS:
                continue
            data[key] = value
        return self

    def is_dirty(self) -> bool:
        return self.data != self.original

    def commit(self) -> Dict[str, Any]:
        row = self.data
        self._data = None
        return row

    def discard(self) -> None:
        self._data = None


class FuelRecordDraft(RecordDraft):
    """
    Draft of a fuel record whose price, volume and cost stay consistent.

    The quantity the user last pinned (volume or cost) is the one kept at
    commit time; the other is derived from it.
    """

    _LINKED = {
        "price_per_liter": Field.PRICE,
        "fuel_amount": Field.VOLUME,
        "total_cost": Field.COST,
    }

    def __init__(self, record: Dict[str, Any], prefer: Field = Field.VOLUME) -> None:
        super().__init__(record)
        self.prefer = Field(prefer)
        self.pinned: Optional[Field] = None

    def _form_state(self) -> FormState:
        data = self.data
        return FormState(
            price=data.get("price_per_liter"),
            volume=data.get("fuel_amount"),
            cost=data.get("total_cost"),
        )

    def _edit_order(self, key: str) -> int:
        field = self._LINKED[key]
        if field is Field.PRICE:
            return 0
        return 2 if field is self.prefer else 1

    def _pin(self, field: Field, value: Any, state: FormState) -> None:
        if parse_number(value) is None:
            return
        if field is not Field.PRICE:
            self.pinned = field
        elif state.volume is not None:
            self.pinned = Field.VOLUME
        elif state.cost is not None:
            self.pinned = Field.COST

    def update(self, **changes: Any) -> "FuelRecordDraft":
        linked = {k: changes.pop(k) for k in list(changes) if k in self._LINKED}
        super().update(**changes)

        # Price first, the preferred quantity last so it wins when both change
        state = self._form_state()
        for key in sorted(linked, key=self._edit_order):
            field = self._LINKED[key]
            self._pin(field, linked[key], state)
            state = reconcile(field, linked[key], state)

        data = self.data
        data["price_per_liter"] = state.price
        data["fuel_amount"] = state.volume
        data["total_cost"] = state.cost
        return self

    def _stored_pin(self) -> Field:
        # A record entered cost-first keeps its typed cost when untouched
        price = parse_number(self.original.get("price_per_liter"))
        volume = parse_number(self.original.get("fuel_amount"))
        cost = parse_number(self.original.get("total_cost"))
        if None in (price, volume, cost) or price <= 0:
            return self.prefer
        return self.prefer if cost == cost_for(price, volume) else Field.COST

    def commit(self) -> Dict[str, Any]:
        data = self.data
        price, volume, cost = complete_entry(
            data.get("price_per_liter"),
            data.get("fuel_amount"),
            data.get("total_cost"),
            prefer=self.pinned or self._stored_pin(),
        )
        data.update(price_per_liter=price, fuel_amount=volume, total_cost=cost)
        return super().commit()
