"""Totals aggregation over ledger records."""

import math
from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Protocol

from food_ledger.domain.ledger import Totals

_TENTH = Decimal("0.1")
# Wide enough for the exact expansion of any finite float.
_CONTEXT = Context(prec=400, rounding=ROUND_HALF_UP)


class MacroSource(Protocol):
    """Anything carrying calories and macro grams."""

    calories: float
    protein: float
    carbs: float
    fat: float


def aggregate(records: Iterable[MacroSource]) -> Totals:
    """Sum calories and macros over records.

    Calories are a plain running sum. Protein, carbs and fat are rounded to
    one decimal after every addition, so the result can depend on order.
    """
    total = Totals(calories=0, protein=0, carbs=0, fat=0)
    for record in records:
        total = Totals(
            calories=total.calories + record.calories,
            protein=round_tenth(total.protein + record.protein),
            carbs=round_tenth(total.carbs + record.carbs),
            fat=round_tenth(total.fat + record.fat),
        )
    return total


def round_tenth(value: float) -> float:
    """Round to one decimal place, halves away from zero.

    Infinities and NaN are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    return float(Decimal(value).quantize(_TENTH, context=_CONTEXT))
