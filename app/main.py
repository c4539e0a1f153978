import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles
from prometheus_fastapi_instrumentator import Instrumentator

from app.api.routes.router import api_router
from app.core.config import settings
from app.core.errors import register_exception_handlers
from app.core.logging import setup_logging
from app.db.bootstrap import run_migrations
from app.services.storage import DOCUMENTS, PROFILE_IMAGES, get_storage

setup_logging()
logger = logging.getLogger(__name__)

# pastas de upload precisam existir antes dos mounts estáticos
storage = get_storage()
storage.init()

api = FastAPI(
    title="Student Records API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    swagger_ui_parameters={"displayRequestDuration": True, "persistAuthorization": True},
)

api.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# métricas /metrics (Prometheus)
Instrumentator().instrument(api).expose(api, include_in_schema=False, should_gzip=True)

register_exception_handlers(api)

# arquivos públicos (sem token)
api.mount(f"/uploads/{PROFILE_IMAGES}", StaticFiles(directory=storage.dirs[PROFILE_IMAGES]), name=PROFILE_IMAGES)
api.mount(f"/uploads/{DOCUMENTS}", StaticFiles(directory=storage.dirs[DOCUMENTS]), name=DOCUMENTS)

api.include_router(api_router, prefix="/api")

@api.get("/", tags=["health"], response_class=PlainTextResponse)
def healthz():
    return "OK"

@api.on_event("startup")
def startup():
    if settings.RUN_MIGRATIONS:
        run_migrations()
    logger.info("Student Records API ready")

app = api
