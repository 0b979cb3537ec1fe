from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CategoryIn(BaseModel):
    # categories.name is VARCHAR(100)
    name: str = Field(..., max_length=100)


class CategoryCreated(BaseModel):
    id: int
    name: str


class CategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    user_id: Optional[int] = None
