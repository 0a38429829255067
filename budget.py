"""
Budget aggregation.

Totals are derived on every read from the user's current incomes and
allocations; nothing is cached or stored.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from config import CATEGORY_TYPES


@dataclass
class CategoryTotal:
    category_id: int
    name: str
    type: str
    amount: float = 0.0


@dataclass
class BudgetSummary:
    """
    Attributes:
        total_income: Sum of all income amounts
        total_allocated: Sum of resolved allocation amounts
        unallocated: total_income - total_allocated (negative when over-allocated)
        by_category: Resolved totals per category, in first-seen order
        by_type: Resolved totals per category type, every type present
    """
    total_income: float
    total_allocated: float
    unallocated: float
    by_category: List[CategoryTotal] = field(default_factory=list)
    by_type: Dict[str, float] = field(default_factory=dict)


def resolve_amount(allocation) -> float:
    """Concrete amount an allocation contributes, using its linked income for percentages."""
    if allocation.amount_allocated is not None:
        return float(allocation.amount_allocated)
    return float(allocation.percentage_allocated) / 100 * float(allocation.income.amount)


def summarize(incomes: Iterable, allocations: Iterable) -> BudgetSummary:
    # Frequency is descriptive only: weekly and monthly amounts are summed as-is.
    total_income = sum(float(income.amount) for income in incomes)

    by_category: Dict[int, CategoryTotal] = {}
    by_type = {t: 0.0 for t in CATEGORY_TYPES}
    total_allocated = 0.0

    for allocation in allocations:
        amount = resolve_amount(allocation)
        total_allocated += amount

        category = allocation.category
        entry = by_category.get(category.id)
        if entry is None:
            entry = by_category[category.id] = CategoryTotal(category.id, category.name, category.type)
        entry.amount += amount
        by_type[category.type] = by_type.get(category.type, 0.0) + amount

    return BudgetSummary(
        total_income=total_income,
        total_allocated=total_allocated,
        unallocated=total_income - total_allocated,
        by_category=list(by_category.values()),
        by_type=by_type,
    )
