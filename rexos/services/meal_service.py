"""
Meal Service
Building meals and summing their macros.

Meal macros are entered by hand for the whole meal. The legacy `quantity`
field is kept as the sum of the food item weights.
"""

from typing import Iterable, Optional, Sequence, Tuple

from rexos.core.formatting import format_number
from rexos.core.identifiers import generate_id
from rexos.schemas.diet import DailyDietLog, FoodItem, MacroTotals, Meal


def build_food_item(name: str, weight: float) -> FoodItem:
    """New food item with a fresh id."""
    return FoodItem(id=generate_id(), name=name, weight=weight)


def build_meal(
    meal_name: str,
    food_items: Sequence[FoodItem] = (),
    calories: float = 0,
    protein: float = 0,
    carbs: float = 0,
    fat: float = 0,
    time: str = "",
    meal_id: Optional[str] = None
) -> Meal:
    """
    Create a meal ready for `LogMeal`.

    Example:
        meal = build_meal(
            "Lunch",
            [build_food_item("Chicken", 150), build_food_item("Rice", 80)],
            calories=520, protein=45, carbs=60, fat=9, time="01:30 PM",
        )
        meal.quantity  # 230
    """
    items: Tuple[FoodItem, ...] = tuple(food_items)
    return Meal(
        id=meal_id or generate_id(),
        meal_name=meal_name,
        food_items=items,
        quantity=sum(item.weight for item in items),
        calories=calories,
        protein=protein,
        carbs=carbs,
        fat=fat,
        time=time,
    )


def sum_meals(meals: Iterable[Meal]) -> MacroTotals:
    """Summed calories, protein, carbs and fat of the given meals."""
    totals = MacroTotals()
    for meal in meals:
        totals = totals + MacroTotals(
            calories=meal.calories,
            protein=meal.protein,
            carbs=meal.carbs,
            fat=meal.fat,
        )
    return totals


def calculate_diet_totals(log: Optional[DailyDietLog]) -> MacroTotals:
    """Macro totals of a day; all zeros when nothing is logged."""
    if log is None:
        return MacroTotals()
    return sum_meals(log.meals)


def get_progress(current: float, target: float) -> float:
    """Percentage of a target reached, capped at 100 (0 when no target)."""
    if target == 0:
        return 0.0
    return min(current / target * 100, 100.0)


def format_food_items(food_items: Sequence[FoodItem]) -> str:
    """e.g. "Chicken (150g), Rice (80g)"."""
    if not food_items:
        return "No items"
    return ", ".join(f"{item.name} ({format_number(item.weight)}g)" for item in food_items)
