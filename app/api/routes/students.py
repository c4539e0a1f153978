# app/api/routes/students.py
from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Tuple

from fastapi import APIRouter, Depends, File, Form, Path, Query, UploadFile, status
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_file_storage, get_public_base_url
from app.core.errors import ValidationError
from app.models.student import Student as StudentModel
from app.schemas.student import (
    DeleteConfirmation,
    DocumentsUploaded,
    Student,
    StudentEnvelope,
    StudentPatch,
    StudentSearchHit,
    StudentSummary,
    UploadedDoc,
)
from app.services import students as lifecycle
from app.services.storage import FileStorage

router = APIRouter()

_JSON_LIST_FIELDS = ("academic_records", "family_members", "work_experiences")
_DATE_FIELDS = ("dob", "pass_doi", "pass_doe")

def _to_schema(s: StudentModel) -> Student:
    return Student.model_validate(s)

def _parse_json_list(raw: str) -> Optional[list]:
    # vazio ou JSON inválido = campo ausente (mantém o valor atual)
    if not raw:
        return None
    try:
        value = json.loads(raw)
    except ValueError:
        return None
    return value if isinstance(value, list) else None

def student_form(
    first_name: Optional[str] = Form(None, alias="firstName"),
    last_name: Optional[str] = Form(None, alias="lastName"),
    phone: Optional[str] = Form(None),
    sex: Optional[str] = Form(None),
    dob: Optional[str] = Form(None),
    pob: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    curr_add: Optional[str] = Form(None, alias="currAdd"),
    temp_add: Optional[str] = Form(None, alias="tempAdd"),
    per_add: Optional[str] = Form(None, alias="perAdd"),
    pass_num: Optional[str] = Form(None, alias="passNum"),
    pass_doi: Optional[str] = Form(None, alias="passDoi"),
    pass_doe: Optional[str] = Form(None, alias="passDoe"),
    coe_status: Optional[str] = Form(None, alias="COEStatus"),
    remarks: Optional[str] = Form(None),
    class_id: Optional[str] = Form(None, alias="classId"),
    academic_records: Optional[str] = Form(None, alias="academicRecords"),
    family_members: Optional[str] = Form(None, alias="familyMembers"),
    work_experiences: Optional[str] = Form(None, alias="workExperiences"),
) -> StudentPatch:
    """Converte o multipart em StudentPatch contendo só os campos enviados."""
    raw: Dict[str, Any] = {k: v for k, v in locals().items() if v is not None}

    for name in _JSON_LIST_FIELDS:
        if name in raw:
            parsed = _parse_json_list(raw.pop(name))
            if parsed is not None:
                raw[name] = parsed
    for name in _DATE_FIELDS:
        if raw.get(name) == "":
            raw.pop(name)
    if raw.get("coe_status") == "":
        raw.pop("coe_status")
    if raw.get("class_id") in ("", "null"):
        # classId vazio = desvincular da turma
        raw["class_id"] = None

    try:
        return StudentPatch.model_validate(raw)
    except PydanticValidationError as exc:
        raise ValidationError(
            "Invalid student fields",
            [{"loc": list(e["loc"]), "msg": e["msg"]} for e in exc.errors()],
        )

def _read_upload(upload: Optional[UploadFile]) -> Optional[Tuple[str, bytes]]:
    if upload is None or not upload.filename:
        return None
    return upload.filename, upload.file.read()

# ------------------------------------------------------------------ leitura

@router.get("/summary", response_model=StudentSummary)
def students_summary(db: Session = Depends(get_db)):
    return StudentSummary(**lifecycle.summary(db))

@router.get("/search", response_model=List[StudentSearchHit])
def search_students(
    q: Optional[str] = Query(None, description="Busca por nome ou sobrenome"),
    db: Session = Depends(get_db),
):
    rows = lifecycle.search_students(db, q)
    return [
        StudentSearchHit(id=s.id, name=f"{s.first_name or ''} {s.last_name or ''}".strip())
        for s in rows
    ]

@router.get("", response_model=List[Student])
def list_students(db: Session = Depends(get_db)):
    return [_to_schema(s) for s in lifecycle.list_students(db)]

@router.get("/{student_id}", response_model=Student)
def get_student(
    student_id: int = Path(...),
    db: Session = Depends(get_db),
):
    return _to_schema(lifecycle.get_student(db, student_id))

# ------------------------------------------------------------------ escrita

@router.post("", response_model=StudentEnvelope, status_code=status.HTTP_201_CREATED)
def create_student(
    patch: StudentPatch = Depends(student_form),
    profile_image: Optional[UploadFile] = File(None, alias="profileImage"),
    db: Session = Depends(get_db),
    storage: FileStorage = Depends(get_file_storage),
):
    s = lifecycle.create_student(db, storage, patch, _read_upload(profile_image))
    return StudentEnvelope(student=_to_schema(s))

@router.put("/{student_id}", response_model=Student)
def update_student(
    student_id: int = Path(...),
    patch: StudentPatch = Depends(student_form),
    profile_image: Optional[UploadFile] = File(None, alias="profileImage"),
    db: Session = Depends(get_db),
    storage: FileStorage = Depends(get_file_storage),
):
    s = lifecycle.update_student(db, storage, student_id, patch, _read_upload(profile_image))
    return _to_schema(s)

@router.delete("/{student_id}", response_model=DeleteConfirmation)
def delete_student(
    student_id: int = Path(...),
    db: Session = Depends(get_db),
    storage: FileStorage = Depends(get_file_storage),
):
    lifecycle.delete_student(db, storage, student_id)
    return DeleteConfirmation(message="Student deleted successfully")

# --------------------------------------------------------------- documentos

@router.post("/{student_id}/documents", response_model=DocumentsUploaded,
             status_code=status.HTTP_201_CREATED)
def upload_documents(
    student_id: int = Path(...),
    documents: Optional[List[UploadFile]] = File(None),
    db: Session = Depends(get_db),
    storage: FileStorage = Depends(get_file_storage),
    base_url: str = Depends(get_public_base_url),
):
    files = [f for f in (_read_upload(u) for u in (documents or [])) if f is not None]
    uploaded, s = lifecycle.add_documents(db, storage, student_id, files, base_url)
    return DocumentsUploaded(
        uploaded_docs=[UploadedDoc(**d) for d in uploaded],
        student=_to_schema(s),
    )

@router.delete("/{student_id}/documents/{doc_id}", response_model=StudentEnvelope)
def delete_document(
    student_id: int = Path(...),
    doc_id: int = Path(...),
    db: Session = Depends(get_db),
    storage: FileStorage = Depends(get_file_storage),
):
    s = lifecycle.delete_document(db, storage, student_id, doc_id)
    return StudentEnvelope(student=_to_schema(s))
