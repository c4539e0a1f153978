# app/api/routes/router.py
from fastapi import APIRouter, Depends

from app.api.deps import get_current_principal
from app.api.routes import certificates, classes, students

api_router = APIRouter(dependencies=[Depends(get_current_principal)])

api_router.include_router(certificates.router, prefix="/students", tags=["certificates"])
api_router.include_router(students.router,     prefix="/students", tags=["students"])
api_router.include_router(classes.router,      prefix="/classes",  tags=["classes"])
