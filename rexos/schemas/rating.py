"""
Rating Schema
Output of the rating engine.
"""

from typing import Literal
from pydantic import Field

from rexos.schemas.base import RexModel


Tier = Literal["excellent", "good", "warning", "danger"]


class Rating(RexModel):
    """
    Score, qualitative tier and message for one domain (or the whole day).

    Example:
        {"score": 80.0, "tier": "good", "message": "Doing great. Push for 100% tomorrow."}
    """
    score: float = Field(..., ge=0, le=100, description="0-100")
    tier: Tier
    message: str
