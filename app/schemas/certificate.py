from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

_camel = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class CertificateIn(BaseModel):
    # ambos opcionais aqui: a ausência vira ValidationError (400) no crud
    model_config = _camel

    generated_data: Optional[Any] = None
    pdf_base64: Optional[str] = None

class Certificate(BaseModel):
    model_config = _camel

    id: int
    student_id: int
    certificate_type: str
    generated_data: Any
    pdf_base64: Optional[str] = None
    pdf_mime_type: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
