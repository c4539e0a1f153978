from enum import Enum
from typing import Any, List, Optional
from datetime import date
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Text, Date, JSON, ForeignKey
from app.db.base import Base, TimestampMixin


class COEStatus(str, Enum):
    pending = "Pending"
    applied = "Applied"
    received = "Received"
    rejected = "Rejected"


class Student(TimestampMixin, Base):
    __tablename__ = "students"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    first_name: Mapped[Optional[str]] = mapped_column(String(120), nullable=True, index=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(120), nullable=True, index=True)
    phone: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)
    sex: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    dob: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    pob: Mapped[Optional[str]] = mapped_column(String(160), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(160), nullable=True)
    curr_add: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    temp_add: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    per_add: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    pass_num: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)
    pass_doi: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    pass_doe: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    coe_status: Mapped[COEStatus] = mapped_column(default=COEStatus.pending, index=True)
    remarks: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    class_id: Mapped[Optional[int]] = mapped_column(ForeignKey("classes.id", ondelete="SET NULL"), nullable=True)
    profile_image: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    academic_records: Mapped[List[Any]] = mapped_column(JSON, default=list)
    family_members: Mapped[List[Any]] = mapped_column(JSON, default=list)
    work_experiences: Mapped[List[Any]] = mapped_column(JSON, default=list)

    school_class = relationship("SchoolClass", foreign_keys=[class_id], lazy="joined")
    documents = relationship(
        "StudentDocument",
        back_populates="student",
        order_by="StudentDocument.id",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    certificates = relationship("LastCertificate", back_populates="student", cascade="all, delete-orphan")
