from __future__ import annotations

from typing import Any, Dict, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from finance_tracker.nlp.taxonomy import CATEGORIES


TransactionType = Literal["income", "expense"]


class ParsedTransaction(BaseModel):
    model_config = ConfigDict(frozen=True)

    amount: float = Field(ge=0, allow_inf_nan=False)
    description: str
    category: str
    type: TransactionType
    confidence: float = Field(ge=0, le=1, allow_inf_nan=False)

    @field_validator("category")
    @classmethod
    def _known_category(cls, v: str) -> str:
        if v not in CATEGORIES:
            raise ValueError(f"unknown category {v!r}")
        return v

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()
