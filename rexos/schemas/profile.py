"""
Profile Schemas
User profile, body measurements and the partial profile update payload.
"""

from typing import Optional
from pydantic import Field

from rexos.core.constants import BMI_CATEGORIES, BMI_TOP_CATEGORY
from rexos.schemas.base import RexModel


class BodyMeasurements(RexModel):
    """
    Body circumferences in cm. Every measurement is optional.

    Example:
        {"biceps": 38.5, "waist": 82, "updatedAt": "2024-01-15T08:00:00+00:00"}
    """
    biceps: Optional[float] = None
    chest: Optional[float] = None
    waist: Optional[float] = None
    abs: Optional[float] = None
    thighs: Optional[float] = None
    calves: Optional[float] = None
    updated_at: str = Field(..., description="When the measurements were taken (ISO-8601)")


class UserProfile(RexModel):
    """
    The registered user. One per aggregate, or absent before registration.
    """
    name: str = Field(..., description="Display name")
    weight: float = Field(..., description="Body weight in kg")
    height: float = Field(..., description="Height in cm")
    measurements: Optional[BodyMeasurements] = Field(None, description="Latest body measurements")
    created_at: str = Field(..., description="Registration timestamp (ISO-8601)")

    def bmi(self) -> float:
        """
        Body-mass index rounded to one decimal, 0 when weight or height is missing.

        Example:
            UserProfile(name="Rex", weight=80, height=180, created_at="...").bmi()  # 24.7
        """
        height_m = self.height / 100
        if not self.weight or not height_m:
            return 0.0
        return round(self.weight / (height_m * height_m), 1)


def bmi_category(bmi: float) -> str:
    """Underweight / Normal / Overweight / Obese."""
    for upper_bound, label in BMI_CATEGORIES:
        if bmi < upper_bound:
            return label
    return BMI_TOP_CATEGORY


class ProfileUpdate(RexModel):
    """
    Partial profile payload.

    Only fields explicitly set are merged into the existing profile,
    so `ProfileUpdate(weight=79.2)` leaves name, height and measurements alone.
    """
    name: Optional[str] = None
    weight: Optional[float] = None
    height: Optional[float] = None
    measurements: Optional[BodyMeasurements] = None
    created_at: Optional[str] = None
