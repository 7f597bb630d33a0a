"""
Diet Schemas
Nutrition targets, meals and per-day diet logs.

Macro values on a Meal are entered manually for the whole meal; they are
not derived from its food items. Food items only document what was eaten.
"""

from typing import Tuple
from pydantic import Field

from rexos.schemas.base import RexModel


class DietTargets(RexModel):
    """Daily nutrition targets."""
    calories: float = Field(..., description="Daily calories (kcal)")
    protein: float = Field(..., description="Daily protein (g)")
    carbs: float = Field(..., description="Daily carbohydrates (g)")
    fat: float = Field(..., description="Daily fat (g)")


class FoodItem(RexModel):
    """One food in a meal."""
    id: str
    name: str
    weight: float = Field(..., description="Weight in grams")


class Meal(RexModel):
    """
    A logged meal.

    Example:
        {
            "id": "1705312345678-k3j9x0q2m",
            "mealName": "Lunch",
            "foodItems": [{"id": "...", "name": "Chicken", "weight": 150}],
            "quantity": 150,
            "calories": 420, "protein": 38, "carbs": 30, "fat": 12,
            "time": "01:30 PM"
        }
    """
    id: str
    meal_name: str = Field(..., description='"Breakfast", "Lunch", "Dinner", "Snack" or custom')
    food_items: Tuple[FoodItem, ...] = ()
    quantity: float = Field(0, description="Sum of food item weights (legacy total)")
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    time: str = Field("", description="Time of day the meal was eaten")


class DailyDietLog(RexModel):
    """All meals of one date, in logging order."""
    date: str = Field(..., description="Date key YYYY-MM-DD")
    meals: Tuple[Meal, ...] = ()


class MacroTotals(RexModel):
    """Summed macros, e.g. of all meals in a day."""
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0

    def __add__(self, other: "MacroTotals") -> "MacroTotals":
        return MacroTotals(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fat=self.fat + other.fat,
        )
