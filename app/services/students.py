# app/services/students.py
"""
Ciclo de vida do aluno e dos seus arquivos.

Invariante mantida aqui: Student.profile_image e Student.documents apontam
exatamente para arquivos existentes nos buckets do FileStorage.

Não há transação cobrindo banco + disco. Cada passo é tentado uma vez; falhas
de limpeza de arquivo são logadas e não interrompem a operação, o registro no
banco é sempre a fonte de verdade.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from app.core.errors import ClassNotFound, DocumentNotFound, StudentNotFound
from app.crud.school_class import class_crud
from app.crud.student import student_crud
from app.models.student import Student
from app.models.student_document import StudentDocument
from app.schemas.student import StudentPatch
from app.services import class_membership
from app.services.storage import (
    DOCUMENTS,
    PROFILE_IMAGES,
    FileStorage,
    StorageError,
    convert_to_webp,
    is_raster_image,
)

logger = logging.getLogger(__name__)

# (nome original, bytes)
UploadedFile = Tuple[str, bytes]


@dataclass
class StepResult:
    step: str
    ok: bool
    error: Optional[str] = None


@dataclass
class CleanupReport:
    student_id: int
    steps: List[StepResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(s.ok for s in self.steps)

    @property
    def failed(self) -> List[StepResult]:
        return [s for s in self.steps if not s.ok]


def _get_or_404(db: Session, student_id: int) -> Student:
    student = student_crud.get(db, student_id)
    if student is None:
        raise StudentNotFound(student_id)
    return student


def _ensure_class(db: Session, class_id: Optional[int]) -> None:
    if class_id is not None and class_crud.get(db, class_id) is None:
        raise ClassNotFound(class_id)


# ------------------------------------------------------------------ leitura

def get_student(db: Session, student_id: int) -> Student:
    return _get_or_404(db, student_id)


def list_students(db: Session) -> List[Student]:
    return student_crud.get_multi(db)


def search_students(db: Session, q: Optional[str]) -> List[Student]:
    return student_crud.search(db, q)


def summary(db: Session) -> Dict[str, int]:
    return student_crud.summary(db)


# ------------------------------------------------------------ create/update

def create_student(
    db: Session,
    storage: FileStorage,
    patch: StudentPatch,
    profile_image: Optional[UploadedFile] = None,
) -> Student:
    data: Dict[str, Any] = patch.model_dump(exclude_unset=True)
    _ensure_class(db, data.get("class_id"))

    if profile_image is not None:
        original_name, content = profile_image
        data["profile_image"] = storage.save(
            PROFILE_IMAGES, storage.profile_image_name(original_name), content
        )

    student = student_crud.create(db, data)

    # segundo passo: se falhar, o aluno continua existindo (sem rollback)
    if student.class_id is not None:
        try:
            class_membership.attach(db, student.class_id, student.id)
        except Exception:
            db.rollback()
            logger.exception("Student %s created but not attached to class %s", student.id, student.class_id)

    logger.info("Created student %s", student.id)
    return student


def update_student(
    db: Session,
    storage: FileStorage,
    student_id: int,
    patch: StudentPatch,
    profile_image: Optional[UploadedFile] = None,
) -> Student:
    student = _get_or_404(db, student_id)
    data: Dict[str, Any] = patch.model_dump(exclude_unset=True)

    old_class_id = student.class_id
    if "class_id" in data:
        _ensure_class(db, data["class_id"])

    if profile_image is not None:
        original_name, content = profile_image
        # a imagem anterior NÃO é apagada aqui; só delete_student limpa
        data["profile_image"] = storage.save(
            PROFILE_IMAGES, storage.profile_image_name(original_name, student.id), content
        )
        if student.profile_image and student.profile_image != data["profile_image"]:
            logger.info(
                "Student %s profile image replaced; previous file %s left in place",
                student.id, student.profile_image,
            )

    student = student_crud.update(db, student, data)

    if "class_id" in data and data["class_id"] != old_class_id:
        if old_class_id is not None:
            class_membership.detach(db, old_class_id, student.id)
        if student.class_id is not None:
            class_membership.attach(db, student.class_id, student.id)
        db.refresh(student)

    return student


# ------------------------------------------------------------------- delete

def delete_student(db: Session, storage: FileStorage, student_id: int) -> CleanupReport:
    student = _get_or_404(db, student_id)
    report = CleanupReport(student_id=student.id)

    if student.profile_image:
        ok = storage.delete(PROFILE_IMAGES, student.profile_image)
        report.steps.append(StepResult(f"profile-image:{student.profile_image}", ok))

    for doc in list(student.documents):
        ok = storage.delete(DOCUMENTS, doc.file_name)
        report.steps.append(StepResult(f"document:{doc.file_name}", ok))

    if student.class_id is not None:
        try:
            class_membership.detach(db, student.class_id, student.id)
            report.steps.append(StepResult(f"class:{student.class_id}", True))
        except Exception as exc:
            db.rollback()
            logger.warning("Failed to detach student %s from class %s: %s", student.id, student.class_id, exc)
            report.steps.append(StepResult(f"class:{student.class_id}", False, str(exc)))

    student_crud.remove(db, student.id)

    if report.ok:
        logger.info("Deleted student %s", student_id)
    else:
        logger.warning(
            "Deleted student %s with %d cleanup failure(s): %s",
            student_id, len(report.failed), [s.step for s in report.failed],
        )
    return report


# ---------------------------------------------------------------- documents

def _store_document(storage: FileStorage, original_name: str, content: bytes) -> str:
    if is_raster_image(original_name):
        # o original nunca vai para o disco, só o webp
        return storage.save(DOCUMENTS, storage.webp_name(), convert_to_webp(content))
    return storage.save(DOCUMENTS, storage.document_name(original_name), content)


def add_documents(
    db: Session,
    storage: FileStorage,
    student_id: int,
    files: Iterable[UploadedFile],
    base_url: str,
) -> Tuple[List[Dict[str, str]], Student]:
    student = _get_or_404(db, student_id)

    uploaded: List[Dict[str, str]] = []
    for original_name, content in files:
        try:
            final_name = _store_document(storage, original_name, content)
        except (StorageError, OSError) as exc:
            logger.warning("Skipping document %r for student %s: %s", original_name, student.id, exc)
            continue

        file_url = storage.public_url(base_url, DOCUMENTS, final_name)
        student.documents.append(StudentDocument(file_name=final_name, file_path=file_url))
        uploaded.append({"file_name": final_name, "file_url": file_url})

    db.add(student)
    db.commit()
    db.refresh(student)
    return uploaded, student


def delete_document(db: Session, storage: FileStorage, student_id: int, doc_id: int) -> Student:
    student = _get_or_404(db, student_id)

    doc = next((d for d in student.documents if d.id == doc_id), None)
    if doc is None:
        raise DocumentNotFound(doc_id)

    storage.delete(DOCUMENTS, doc.file_name)
    student.documents.remove(doc)
    db.add(student)
    db.commit()
    db.refresh(student)
    return student
