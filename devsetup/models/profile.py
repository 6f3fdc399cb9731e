"""
Profile models.
"""

from typing import FrozenSet
from pydantic import BaseModel, Field, validator


class Profile(BaseModel):
    """A named bundle of components selected for one use case."""
    id: str = Field(..., description="Profile identifier")
    description: str = Field(default="", description="Human readable description")
    implies: FrozenSet[str] = Field(
        default_factory=frozenset,
        description="Profiles whose components are also relevant when this one is selected"
    )

    @validator('implies')
    def validate_not_self_implied(cls, v, values):
        if values.get('id') in v:
            raise ValueError(f"Profile {values.get('id')} cannot imply itself")
        return v

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "id": "AI_ML_Stack",
                "description": "Deep learning frameworks on top of the data science core",
                "implies": ["Data_Science_Core"]
            }
        }
