from sqlalchemy import Table, Column, ForeignKey, UniqueConstraint
from app.db.base import Base

class_students = Table(
    "class_students",
    Base.metadata,
    Column("class_id", ForeignKey("classes.id", ondelete="CASCADE"), primary_key=True),
    Column("student_id", ForeignKey("students.id", ondelete="CASCADE"), primary_key=True),
    UniqueConstraint("class_id", "student_id", name="uq_class_student"),
)
