from pydantic import BaseModel, Field, field_validator
from typing import Optional, List

from catalog.domain.models.common import ObjectIdStr, UtcDatetime

class Product(BaseModel):
    id: ObjectIdStr = Field(alias="_id")
    name: str
    description: Optional[str] = None
    price: float
    category: str
    images: List[str] = []
    stock: int = 0
    featured: bool = False
    sizes: List[str] = []
    colors: List[str] = []
    createdAt: UtcDatetime

    model_config = {"frozen": True, "populate_by_name": True}  # immuable = safe

class ProductCreate(BaseModel):
    """Accepted fields on creation; `_id` and `createdAt` are assigned server side."""
    name: str = Field(min_length=1)
    description: Optional[str] = None
    price: float
    category: str = Field(min_length=1)
    images: List[str] = Field(default_factory=list)
    stock: int = 0
    featured: bool = False
    sizes: List[str] = Field(default_factory=list)
    colors: List[str] = Field(default_factory=list)

    model_config = {"extra": "forbid"}

class ProductUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = None
    category: Optional[str] = Field(default=None, min_length=1)
    images: Optional[List[str]] = None
    stock: Optional[int] = None
    featured: Optional[bool] = None
    sizes: Optional[List[str]] = None
    colors: Optional[List[str]] = None

    model_config = {"extra": "forbid"}

    # Only description may be cleared; the rest keep their create-time invariants.
    @field_validator("name", "price", "category", "images", "stock", "featured", "sizes", "colors")
    @classmethod
    def _not_null(cls, v):
        if v is None:
            raise ValueError("may not be null")
        return v

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)

class DeleteResult(BaseModel):
    message: str
