# app/api/routes/classes.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.core.errors import ClassNotFound
from app.crud.school_class import class_crud
from app.models.school_class import SchoolClass as ClassModel
from app.schemas.school_class import ClassCreate, ClassUpdate, SchoolClass
from app.schemas.student import DeleteConfirmation
from app.services import class_membership

router = APIRouter()

def _to_schema(db: Session, c: ClassModel) -> SchoolClass:
    return SchoolClass(
        id=c.id,
        name=c.name,
        description=c.description,
        students=class_membership.members(db, c.id),
        created_at=getattr(c, "created_at", None),
    )

def _get_or_404(db: Session, class_id: int) -> ClassModel:
    c = class_crud.get(db, class_id)
    if not c:
        raise ClassNotFound(class_id)
    return c

@router.get("", response_model=List[SchoolClass])
def list_classes(db: Session = Depends(get_db)):
    return [_to_schema(db, c) for c in class_crud.get_multi(db)]

@router.post("", response_model=SchoolClass, status_code=status.HTTP_201_CREATED)
def create_class(body: ClassCreate, db: Session = Depends(get_db)):
    return _to_schema(db, class_crud.create(db, body))

@router.get("/{class_id}", response_model=SchoolClass)
def get_class(class_id: int = Path(...), db: Session = Depends(get_db)):
    return _to_schema(db, _get_or_404(db, class_id))

@router.put("/{class_id}", response_model=SchoolClass)
def update_class(
    body: ClassUpdate,
    class_id: int = Path(...),
    db: Session = Depends(get_db),
):
    c = _get_or_404(db, class_id)
    return _to_schema(db, class_crud.update(db, c, body))

@router.delete("/{class_id}", response_model=DeleteConfirmation)
def delete_class(class_id: int = Path(...), db: Session = Depends(get_db)):
    if class_crud.remove(db, class_id) is None:
        raise ClassNotFound(class_id)
    return DeleteConfirmation(message="Class deleted successfully")
