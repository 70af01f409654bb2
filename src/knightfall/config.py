from __future__ import annotations

from enum import IntEnum
from typing import Optional

from pydantic import BaseModel, Field


class Difficulty(IntEnum):
    """Exponent applied to the random draw when picking among candidates.

    Higher values favour the front of a provider's list, i.e. its best moves.
    """

    EASY = 1
    MEDIUM = 2
    HARD = 3


class EngineOptions(BaseModel):
    difficulty: Difficulty = Field(default=Difficulty.MEDIUM, description="Selection strength")
    book_path: Optional[str] = Field(default=None, description="JSON opening book file")
    search_depth: int = Field(default=2, ge=1, le=4, description="Search depth in plies")
