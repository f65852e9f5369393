from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

NO_EFFICIENCY = "0"
BUDGET_WARNING_PERCENT = 80.0


@dataclass
class MonthlySummary:
    """Monthly fuel and toll statistics for a single owner."""

    monthly_fuel_cost: int
    monthly_toll_cost: int
    total_fuel: float
    total_distance: int
    avg_efficiency: str
    budget: int
    remaining: int
    used_percent: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _number(record: Dict[str, Any], key: str) -> float:
    value = record.get(key)
    return float(value) if value is not None else 0.0


class FuelAnalyzer:
    """
    Summary statistics over fuel and toll records already narrowed to one
    reporting period. Every method is a pure computation over plain dicts.
    """

    def total_fuel_cost(self, fuel_records: List[Dict[str, Any]]) -> int:
        return int(sum(_number(r, "total_cost") for r in fuel_records))

    def total_toll_cost(self, toll_records: List[Dict[str, Any]]) -> int:
        return int(sum(_number(r, "amount") for r in toll_records))

    def total_distance(self, fuel_records: List[Dict[str, Any]]) -> int:
        return int(sum(_number(r, "distance") for r in fuel_records))

    def total_fuel(self, fuel_records: List[Dict[str, Any]]) -> float:
        return round(sum(_number(r, "fuel_amount") for r in fuel_records), 2)

    @staticmethod
    def chronological(fuel_records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        # A missing time sorts before any filled-in time on the same day
        return sorted(fuel_records, key=lambda r: (r.get("date") or "", r.get("time") or ""))

    def average_efficiency(self, fuel_records: List[Dict[str, Any]]) -> str:
        """
        Mean km/L over consecutive fill-ups.

        Distance is logged as "km since the last fill-up", so each record's
        distance is divided by the volume of the fill-up before it.
        """
        ordered = self.chronological(fuel_records)
        efficiency_sum = 0.0
        pairs = 0
        for previous, current in zip(ordered, ordered[1:]):
            distance = _number(current, "distance")
            volume = _number(previous, "fuel_amount")
            if distance > 0 and volume > 0:
                efficiency_sum += distance / volume
                pairs += 1

        if pairs == 0:
            return NO_EFFICIENCY
        return f"{efficiency_sum / pairs:.2f}"

    @staticmethod
    def record_efficiency(record: Dict[str, Any]) -> Optional[str]:
        """km/L of a single fill-up from its own distance and volume."""
        distance = _number(record, "distance")
        volume = _number(record, "fuel_amount")
        if distance > 0 and volume > 0:
            return f"{distance / volume:.2f}"
        return None

    def summarize(
        self,
        fuel_records: List[Dict[str, Any]],
        toll_records: List[Dict[str, Any]],
        budget: Optional[int] = 0,
    ) -> MonthlySummary:
        budget = int(budget or 0)
        fuel_cost = self.total_fuel_cost(fuel_records)
        toll_cost = self.total_toll_cost(toll_records)
        spent = fuel_cost + toll_cost

        used_percent = 0.0
        if budget > 0:
            used_percent = round(min(max(100.0 * spent / budget, 0.0), 100.0), 2)

        return MonthlySummary(
            monthly_fuel_cost=fuel_cost,
            monthly_toll_cost=toll_cost,
            total_fuel=self.total_fuel(fuel_records),
            total_distance=self.total_distance(fuel_records),
            avg_efficiency=self.average_efficiency(fuel_records),
            budget=budget,
            remaining=budget - spent,
            used_percent=used_percent,
        )

    def budget_notices(self, summary: MonthlySummary) -> List[Dict[str, Any]]:
        """User-facing budget warnings for a monthly summary."""
        if summary.budget <= 0:
            return []

        spent = summary.monthly_fuel_cost + summary.monthly_toll_cost
        if summary.remaining < 0:
            return [{
                "type": "budget_exceeded",
                "severity": "high",
                "message": f"Spending of {spent:,} exceeds the monthly budget of {summary.budget:,} by {-summary.remaining:,}.",
            }]
        if summary.used_percent >= BUDGET_WARNING_PERCENT:
            return [{
                "type": "budget_warning",
                "severity": "medium",
                "message": f"{summary.used_percent:.0f}% of the monthly budget is used; {summary.remaining:,} remaining.",
            }]
        return []


def aggregate(
    fuel_records: List[Dict[str, Any]],
    toll_records: List[Dict[str, Any]],
    budget: Optional[int] = 0,
) -> Dict[str, Any]:
    summary = FuelAnalyzer().summarize(fuel_records, toll_records, budget)
    data = summary.to_dict()
    data.pop("budget")
    return data
