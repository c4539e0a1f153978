from sqlalchemy import update
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.school_class import SchoolClass
from app.models.student import Student
from app.schemas.school_class import ClassCreate, ClassUpdate
from app.services import class_membership

class CRUDSchoolClass(CRUDBase[SchoolClass, ClassCreate, ClassUpdate]):
    def remove(self, db: Session, id: int) -> SchoolClass | None:
        # turma não apaga alunos: só desvincula
        obj = self.get(db, id)
        if not obj:
            return None
        db.execute(update(Student).where(Student.class_id == id).values(class_id=None))
        class_membership.clear(db, id)
        db.delete(obj); db.commit()
        return obj

class_crud = CRUDSchoolClass(SchoolClass)
