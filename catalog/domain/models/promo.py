from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from typing import Optional

from catalog.domain.models.common import ObjectIdStr, UtcDatetime


def normalize_code(code: str) -> str:
    return code.strip().upper()


class PromoCode(BaseModel):
    id: ObjectIdStr = Field(alias="_id")
    code: str
    discount: float
    expiresAt: Optional[UtcDatetime] = None
    active: bool = True

    model_config = {"frozen": True, "populate_by_name": True}


class PromoCreate(BaseModel):
    code: str
    discount: float
    expiresAt: Optional[datetime] = None
    active: bool = True

    model_config = {"extra": "forbid"}

    @field_validator("code")
    @classmethod
    def _normalize(cls, v: str) -> str:
        v = normalize_code(v)
        if not v:
            raise ValueError("code must not be empty")
        return v


class PromoDiscount(BaseModel):
    discount: float
