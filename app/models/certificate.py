from enum import Enum
from typing import Any, Dict, Optional
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import ForeignKey, String, JSON, LargeBinary, UniqueConstraint
from app.db.base import Base, TimestampMixin

class CertificateType(str, Enum):
    relationship = "relationship"
    birth = "birth"
    income = "income"
    occupation = "occupation"
    address = "address"
    tax = "tax"
    fiscal = "fiscal"
    profile = "profile"
    language = "language"

class LastCertificate(TimestampMixin, Base):
    __tablename__ = "last_certificates"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    student_id: Mapped[int] = mapped_column(ForeignKey("students.id", ondelete="CASCADE"), index=True)
    certificate_type: Mapped[str] = mapped_column(String(32), index=True)
    generated_data: Mapped[Dict[str, Any]] = mapped_column(JSON)
    pdf_data: Mapped[Optional[bytes]] = mapped_column(LargeBinary, nullable=True)
    pdf_mime_type: Mapped[str] = mapped_column(String(80), default="application/pdf")

    student = relationship("Student", back_populates="certificates")

    __table_args__ = (
        UniqueConstraint("student_id", "certificate_type", name="uq_last_certificate_student_type"),
    )
