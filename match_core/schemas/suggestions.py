from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

SuggestionType = Literal["condition", "hospital", "city"]


class Suggestion(BaseModel):
    type: SuggestionType
    text: str
    id: str | None = None
    count: int | None = None
