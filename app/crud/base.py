from typing import TypeVar, Generic, Type, Any, Optional, List, Dict
from sqlalchemy import select, func
from sqlalchemy.orm import Session
from pydantic import BaseModel
from app.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)
CreateSchema = TypeVar("CreateSchema", bound=BaseModel)
UpdateSchema = TypeVar("UpdateSchema", bound=BaseModel)

class CRUDBase(Generic[ModelType, CreateSchema, UpdateSchema]):
    def __init__(self, model: Type[ModelType]): self.model = model

    def get(self, db: Session, id: Any) -> Optional[ModelType]:
        return db.get(self.model, id)

    def get_multi(self, db: Session, skip=0, limit: Optional[int] = None) -> List[ModelType]:
        stmt = select(self.model).order_by(self.model.id).offset(skip)
        if limit is not None: stmt = stmt.limit(limit)
        return list(db.execute(stmt).scalars().all())

    def find(self, db: Session, *where, limit: Optional[int] = None) -> List[ModelType]:
        stmt = select(self.model).where(*where).order_by(self.model.id)
        if limit is not None: stmt = stmt.limit(limit)
        return list(db.execute(stmt).scalars().all())

    def find_one(self, db: Session, *where) -> Optional[ModelType]:
        return db.execute(select(self.model).where(*where)).scalars().first()

    def count(self, db: Session, *where) -> int:
        return db.scalar(select(func.count()).select_from(self.model).where(*where)) or 0

    def create(self, db: Session, obj_in: CreateSchema | Dict[str, Any], extra: Dict[str, Any] | None=None) -> ModelType:
        data = dict(obj_in) if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)
        if extra: data.update(extra)
        obj = self.model(**data)
        db.add(obj); db.commit(); db.refresh(obj)
        return obj

    def update(self, db: Session, db_obj: ModelType, obj_in: UpdateSchema | Dict[str, Any]) -> ModelType:
        data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)
        for f,v in data.items(): setattr(db_obj, f, v)
        db.add(db_obj); db.commit(); db.refresh(db_obj)
        return db_obj

    def upsert(self, db: Session, key: Dict[str, Any], values: Dict[str, Any]) -> ModelType:
        """Atualiza a linha identificada por `key` ou insere se não existir."""
        where = [getattr(self.model, k) == v for k, v in key.items()]
        obj = self.find_one(db, *where)
        if obj is None:
            obj = self.model(**key, **values)
            db.add(obj)
        else:
            for f, v in values.items(): setattr(obj, f, v)
        db.commit(); db.refresh(obj)
        return obj

    def remove(self, db: Session, id: Any) -> Optional[ModelType]:
        obj = self.get(db, id)
        if not obj: return None
        db.delete(obj); db.commit(); return obj
