from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import datetime

# snake_case in Python and Mongo, camelCase on the wire
_FROZEN_CAMEL = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

class Product(BaseModel):
    product_id: str
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    price: float = Field(ge=0)
    stock: int = 0
    image_url: Optional[str] = None
    created_at: datetime

    model_config = _FROZEN_CAMEL  # immuable = safe

class InteractionType(str, Enum):
    VIEW = "view"
    CART = "cart"
    PURCHASE = "purchase"
    LIKE = "like"

class Interaction(BaseModel):
    interaction_id: Optional[str] = None
    user_id: str
    product_id: str
    type: InteractionType
    created_at: datetime

    model_config = _FROZEN_CAMEL

class OrderItem(BaseModel):
    product_id: str
    quantity: int = 1
    price: Optional[float] = None

    model_config = _FROZEN_CAMEL

class Order(BaseModel):
    order_id: Optional[str] = None
    user_id: Optional[str] = None
    items: List[OrderItem] = []
    created_at: Optional[datetime] = None

    model_config = _FROZEN_CAMEL

class RecommendationItem(BaseModel):
    product: Product
    reason: str
    match_score: float = Field(ge=0, le=1)

    model_config = _FROZEN_CAMEL

class PersonalizedHome(BaseModel):
    recommendations: List[RecommendationItem] = []
    trending: List[RecommendationItem] = []
    recently_viewed: List[Product] = []
    category_suggestions: List[str] = []

    model_config = _FROZEN_CAMEL
