# api/v1/schemas/reco.py
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional

class InteractionIn(BaseModel):
    # kept as plain strings: the engine owns validation and answers 400
    product_id: Optional[str] = Field(default=None, description="Product the user acted on")
    type: Optional[str] = Field(default=None, description="view | cart | purchase | like")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class InteractionAck(BaseModel):
    message: str = "Interaction tracked"
    interaction_id: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class ErrorOut(BaseModel):
    error: str
    details: dict = Field(default_factory=dict)
