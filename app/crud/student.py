from typing import Dict, List
from sqlalchemy import or_
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.student import Student, COEStatus
from app.schemas.student import StudentPatch

SEARCH_LIMIT = 10

class CRUDStudent(CRUDBase[Student, StudentPatch, StudentPatch]):
    def summary(self, db: Session) -> Dict[str, int]:
        return {
            "total_students": self.count(db),
            "pending_coe": self.count(db, Student.coe_status == COEStatus.pending),
            "applied_coe": self.count(db, Student.coe_status == COEStatus.applied),
            "received_coe": self.count(db, Student.coe_status == COEStatus.received),
        }

    def search(self, db: Session, q: str | None) -> List[Student]:
        q = (q or "").strip()
        if not q:
            return []
        # % e _ do usuário são literais
        escaped = q.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        like = f"%{escaped}%"
        return self.find(
            db,
            or_(
                Student.first_name.ilike(like, escape="\\"),
                Student.last_name.ilike(like, escape="\\"),
            ),
            limit=SEARCH_LIMIT,
        )

student_crud = CRUDStudent(Student)
