# app/api/routes/certificates.py
from __future__ import annotations

import base64
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Path, Response
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.crud import certificate as certificate_store
from app.models.certificate import LastCertificate
from app.schemas.certificate import Certificate, CertificateIn

router = APIRouter()

def _to_out(c: LastCertificate) -> Certificate:
    return Certificate(
        id=c.id,
        student_id=c.student_id,
        certificate_type=c.certificate_type,
        generated_data=c.generated_data,
        pdf_base64=base64.b64encode(c.pdf_data).decode("ascii") if c.pdf_data else None,
        pdf_mime_type=c.pdf_mime_type,
        created_at=c.created_at,
        updated_at=c.updated_at,
    )

@router.post("/{student_id}/certificates/{certificate_type}", response_model=Certificate)
def save_certificate(
    student_id: int = Path(...),
    certificate_type: str = Path(...),
    body: Optional[CertificateIn] = Body(None),
    db: Session = Depends(get_db),
):
    body = body or CertificateIn()
    saved = certificate_store.upsert_certificate(
        db,
        student_id=student_id,
        certificate_type=certificate_type,
        generated_data=body.generated_data,
        pdf_base64=body.pdf_base64,
    )
    return _to_out(saved)

@router.get("/{student_id}/certificates", response_model=List[Certificate])
def list_certificates(
    student_id: int = Path(...),
    db: Session = Depends(get_db),
):
    return [_to_out(c) for c in certificate_store.list_certificates(db, student_id=student_id)]

@router.get("/{student_id}/certificates/{certificate_type}/pdf")
def download_certificate_pdf(
    student_id: int = Path(...),
    certificate_type: str = Path(...),
    db: Session = Depends(get_db),
):
    c = certificate_store.get_certificate(db, student_id=student_id, certificate_type=certificate_type)
    return Response(
        content=c.pdf_data or b"",
        media_type=c.pdf_mime_type,
        headers={"Content-Disposition": f'inline; filename="{certificate_type}-{student_id}.pdf"'},
    )
