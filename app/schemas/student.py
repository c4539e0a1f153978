from __future__ import annotations

from datetime import date, datetime
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.student import COEStatus
from app.schemas.document import Document
from app.schemas.school_class import ClassSummary

_camel = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

class StudentPatch(BaseModel):
    """
    Campos aceitos no create/update. Tudo opcional: o que não vier no
    formulário não é tocado (`model_dump(exclude_unset=True)`).
    """
    model_config = _camel

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    sex: Optional[str] = None
    dob: Optional[date] = None
    pob: Optional[str] = None
    email: Optional[str] = None
    curr_add: Optional[str] = None
    temp_add: Optional[str] = None
    per_add: Optional[str] = None
    pass_num: Optional[str] = None
    pass_doi: Optional[date] = None
    pass_doe: Optional[date] = None
    coe_status: Optional[COEStatus] = Field(default=None, alias="COEStatus")
    remarks: Optional[str] = None
    class_id: Optional[int] = None
    academic_records: Optional[List[Any]] = None
    family_members: Optional[List[Any]] = None
    work_experiences: Optional[List[Any]] = None

class Student(BaseModel):
    model_config = _camel

    id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    sex: Optional[str] = None
    dob: Optional[date] = None
    pob: Optional[str] = None
    email: Optional[str] = None
    curr_add: Optional[str] = None
    temp_add: Optional[str] = None
    per_add: Optional[str] = None
    pass_num: Optional[str] = None
    pass_doi: Optional[date] = None
    pass_doe: Optional[date] = None
    coe_status: COEStatus = Field(default=COEStatus.pending, alias="COEStatus")
    remarks: Optional[str] = None
    class_id: Optional[int] = None
    school_class: Optional[ClassSummary] = Field(
        default=None,
        validation_alias=AliasChoices("school_class", "class"),
        serialization_alias="class",
    )
    profile_image: Optional[str] = None
    academic_records: List[Any] = Field(default_factory=list)
    family_members: List[Any] = Field(default_factory=list)
    work_experiences: List[Any] = Field(default_factory=list)
    documents: List[Document] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class StudentEnvelope(BaseModel):
    student: Student

class StudentSearchHit(BaseModel):
    id: int
    name: str

class StudentSummary(BaseModel):
    model_config = _camel

    total_students: int
    pending_coe: int
    applied_coe: int
    received_coe: int

class UploadedDoc(BaseModel):
    model_config = _camel

    file_name: str
    file_url: str

class DocumentsUploaded(BaseModel):
    model_config = _camel

    uploaded_docs: List[UploadedDoc]
    student: Student

class DeleteConfirmation(BaseModel):
    message: str
