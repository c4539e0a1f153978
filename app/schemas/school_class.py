from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_camel = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

class ClassSummary(BaseModel):
    model_config = _camel

    id: int
    name: str
    description: Optional[str] = None

class ClassCreate(BaseModel):
    model_config = _camel

    name: str = Field(min_length=1, max_length=120)
    description: Optional[str] = None

class ClassUpdate(BaseModel):
    model_config = _camel

    name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    description: Optional[str] = None

class SchoolClass(ClassSummary):
    students: List[int] = Field(default_factory=list)
    created_at: Optional[datetime] = None
