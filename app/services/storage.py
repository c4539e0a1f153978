# app/services/storage.py
"""
Armazenamento de uploads em disco.

Dois "buckets" planos dentro de UPLOAD_DIR:
    profile-images/   foto de perfil do aluno
    documents/        documentos anexados ao aluno

Os arquivos são endereçados só pelo nome; quem guarda a referência é o
registro do aluno (Student.profile_image / Student.documents).
"""
from __future__ import annotations

import io
import logging
import os
import time
import uuid
from typing import Dict, Optional

from PIL import Image, UnidentifiedImageError

from app.core.config import settings

logger = logging.getLogger(__name__)

PROFILE_IMAGES = "profile-images"
DOCUMENTS = "documents"
BUCKETS = (PROFILE_IMAGES, DOCUMENTS)

RASTER_EXTENSIONS = {".jpg", ".jpeg", ".png"}


class StorageError(Exception):
    pass


def _now_ms() -> int:
    return int(time.time() * 1000)


def is_raster_image(filename: str) -> bool:
    return os.path.splitext(filename or "")[1].lower() in RASTER_EXTENSIONS


def convert_to_webp(data: bytes, quality: Optional[int] = None) -> bytes:
    """Re-encoda JPG/PNG em WebP (qualidade padrão: WEBP_QUALITY)."""
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError) as exc:
        raise StorageError(f"Not a readable image: {exc}") from exc

    if img.mode not in ("RGB", "RGBA"):
        img = img.convert("RGBA" if "A" in img.getbands() or img.mode == "P" else "RGB")

    out = io.BytesIO()
    img.save(out, format="WEBP", quality=quality if quality is not None else settings.WEBP_QUALITY)
    return out.getvalue()


class FileStorage:
    def __init__(self, root: str):
        self.root = os.path.abspath(root)
        self.dirs: Dict[str, str] = {b: os.path.join(self.root, b) for b in BUCKETS}

    def init(self) -> None:
        # idempotente: pode rodar a cada boot
        for path in self.dirs.values():
            os.makedirs(path, exist_ok=True)
        logger.info("Upload buckets ready under %s", self.root)

    def path_for(self, bucket: str, name: str) -> str:
        if bucket not in self.dirs:
            raise StorageError(f"Unknown bucket: {bucket}")
        # nomes são sempre planos, nunca caminhos
        return os.path.join(self.dirs[bucket], os.path.basename(name))

    def exists(self, bucket: str, name: str) -> bool:
        return os.path.isfile(self.path_for(bucket, name))

    def save(self, bucket: str, name: str, data: bytes) -> str:
        path = self.path_for(bucket, name)
        with open(path, "wb") as f:
            f.write(data)
        logger.debug("Saved %s/%s (%d bytes)", bucket, name, len(data))
        return os.path.basename(path)

    def delete(self, bucket: str, name: str) -> bool:
        """
        Remoção best-effort. Arquivo inexistente não é erro (retorna True);
        falha de I/O é logada e retorna False, sem propagar.
        """
        try:
            path = self.path_for(bucket, name)
            if os.path.exists(path):
                os.remove(path)
                logger.debug("Deleted %s/%s", bucket, name)
            return True
        except (OSError, StorageError) as exc:
            logger.warning("Failed to delete %s/%s: %s", bucket, name, exc)
            return False

    # ---------------- nomes gerados ----------------

    @staticmethod
    def profile_image_name(original_name: str, student_id: Optional[int] = None) -> str:
        ext = os.path.splitext(original_name or "")[1].lower()
        if student_id is not None:
            return f"{student_id}{ext}"
        return f"{_now_ms()}-{uuid.uuid4().hex[:8]}{ext}"

    @staticmethod
    def document_name(original_name: str) -> str:
        return f"{_now_ms()}-{uuid.uuid4().hex[:8]}-{os.path.basename(original_name or 'file')}"

    @staticmethod
    def webp_name() -> str:
        return f"{_now_ms()}-{uuid.uuid4().hex[:8]}.webp"

    def public_url(self, base_url: str, bucket: str, name: str) -> str:
        return f"{base_url.rstrip('/')}/uploads/{bucket}/{name}"


_storage: Optional[FileStorage] = None


def get_storage() -> FileStorage:
    global _storage
    if _storage is None:
        _storage = FileStorage(settings.UPLOAD_DIR)
    return _storage
