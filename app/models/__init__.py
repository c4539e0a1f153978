# app/models/__init__.py
# Carrega módulos para registrar tabelas no metadata:
from app.models.class_student import class_students  # noqa: F401
from app.models.school_class import SchoolClass  # noqa: F401
from app.models.student import Student, COEStatus  # noqa: F401
from app.models.student_document import StudentDocument  # noqa: F401
from app.models.certificate import LastCertificate, CertificateType  # noqa: F401

__all__ = [
    "class_students",
    "SchoolClass",
    "Student",
    "COEStatus",
    "StudentDocument",
    "LastCertificate",
    "CertificateType",
]
