# app/crud/certificate.py
from __future__ import annotations

import base64
import binascii
import logging
from typing import Any, List

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.errors import CertificateNotFound, StudentNotFound, ValidationError
from app.crud.base import CRUDBase
from app.models.certificate import CertificateType, LastCertificate
from app.models.student import Student
from app.schemas.certificate import CertificateIn

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"

certificate_crud = CRUDBase[LastCertificate, CertificateIn, CertificateIn](LastCertificate)


def _valid_type(certificate_type: str) -> str:
    try:
        return CertificateType(certificate_type).value
    except ValueError:
        raise ValidationError(
            f"Unknown certificate type '{certificate_type}'",
            {"allowed": [t.value for t in CertificateType]},
        )


def _decode_pdf(pdf_base64: str) -> bytes:
    # aceita data URI ("data:application/pdf;base64,....")
    if pdf_base64.startswith("data:") and "," in pdf_base64:
        pdf_base64 = pdf_base64.split(",", 1)[1]
    # quebras de linha são comuns em base64 longo
    pdf_base64 = "".join(pdf_base64.split())
    try:
        pdf = base64.b64decode(pdf_base64, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("pdfBase64 is not valid base64")
    if not pdf:
        raise ValidationError("pdfBase64 decodes to an empty document")
    return pdf


def upsert_certificate(
    db: Session,
    *,
    student_id: int,
    certificate_type: str,
    generated_data: Any,
    pdf_base64: str | None,
) -> LastCertificate:
    """
    Grava o último certificado gerado para (aluno, tipo). Se já existir,
    sobrescreve no lugar; nunca cria uma segunda linha para o mesmo par.
    """
    if generated_data in (None, "") or not pdf_base64:
        raise ValidationError("Missing generatedData or pdfBase64")
    ctype = _valid_type(certificate_type)
    pdf_bytes = _decode_pdf(pdf_base64)

    if db.get(Student, student_id) is None:
        raise StudentNotFound(student_id)

    saved = certificate_crud.upsert(
        db,
        key={"student_id": student_id, "certificate_type": ctype},
        values={
            "generated_data": generated_data,
            "pdf_data": pdf_bytes,
            "pdf_mime_type": PDF_MIME_TYPE,
            "updated_at": func.now(),
        },
    )
    logger.info("Saved %s certificate %s for student %s (%d bytes)", ctype, saved.id, student_id, len(pdf_bytes))
    return saved


def list_certificates(db: Session, *, student_id: int) -> List[LastCertificate]:
    return certificate_crud.find(db, LastCertificate.student_id == student_id)


def get_certificate(db: Session, *, student_id: int, certificate_type: str) -> LastCertificate:
    cert = certificate_crud.find_one(
        db,
        LastCertificate.student_id == student_id,
        LastCertificate.certificate_type == certificate_type,
    )
    if cert is None:
        raise CertificateNotFound(student_id, certificate_type)
    return cert
