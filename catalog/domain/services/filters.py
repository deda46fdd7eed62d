import re
from typing import Optional
from pydantic import BaseModel

from catalog.core.errors import BadRequest
from catalog.domain.services.constants import CATEGORY_ALL

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}

def parse_featured(raw: Optional[str]) -> Optional[bool]:
    """
    Tri-state parse of the `featured` query flag.
    Empty/absent -> None (no constraint); anything outside the vocabulary is rejected.
    """
    if raw is None:
        return None
    s = raw.strip().lower()
    if not s:
        return None
    if s in _TRUE:
        return True
    if s in _FALSE:
        return False
    raise BadRequest(f"Invalid value for 'featured': {raw!r}")

class ProductFilter(BaseModel):
    category: Optional[str] = None
    search: Optional[str] = None
    featured: Optional[bool] = None

    model_config = {"frozen": True}

    @classmethod
    def from_query(cls, category: Optional[str], search: Optional[str], featured: Optional[str]) -> "ProductFilter":
        return cls(category=category, search=search, featured=parse_featured(featured))

def build_product_query(f: ProductFilter) -> dict:
    """
    Conjunctive Mongo filter for a product listing.
    - category: exact match, unless empty or the "all" sentinel
    - search: case-insensitive substring on name (matched literally, not as a regex)
    - featured: exact match when set
    """
    query: dict = {}
    if f.category and f.category != CATEGORY_ALL:
        query["category"] = f.category
    if f.search:
        query["name"] = {"$regex": re.escape(f.search), "$options": "i"}
    if f.featured is not None:
        query["featured"] = f.featured
    return query
