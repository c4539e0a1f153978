import os

import pytest

from app.services.storage import (
    DOCUMENTS,
    PROFILE_IMAGES,
    FileStorage,
    StorageError,
    convert_to_webp,
    is_raster_image,
)


@pytest.fixture
def local_storage(tmp_path) -> FileStorage:
    s = FileStorage(str(tmp_path / "uploads"))
    s.init()
    return s


def test_init_is_idempotent(local_storage: FileStorage):
    local_storage.save(DOCUMENTS, "keep.txt", b"x")

    local_storage.init()

    assert os.path.isdir(local_storage.dirs[PROFILE_IMAGES])
    assert local_storage.exists(DOCUMENTS, "keep.txt")


@pytest.mark.parametrize("name,expected", [
    ("photo.jpg", True),
    ("photo.JPEG", True),
    ("scan.Png", True),
    ("anim.gif", False),
    ("cv.pdf", False),
    ("noext", False),
])
def test_is_raster_image(name, expected):
    assert is_raster_image(name) is expected


def test_convert_to_webp(png_bytes):
    data = convert_to_webp(png_bytes)

    assert data[:4] == b"RIFF"
    assert data[8:12] == b"WEBP"


def test_convert_palette_png():
    import io
    from PIL import Image

    buf = io.BytesIO()
    Image.new("P", (4, 4)).save(buf, format="PNG")

    assert convert_to_webp(buf.getvalue())[8:12] == b"WEBP"


def test_convert_rejects_garbage():
    with pytest.raises(StorageError):
        convert_to_webp(b"definitely not an image")


def test_delete_missing_file_is_not_an_error(local_storage: FileStorage):
    assert local_storage.delete(DOCUMENTS, "ghost.txt") is True


def test_delete_failure_is_swallowed(local_storage: FileStorage, monkeypatch):
    local_storage.save(DOCUMENTS, "locked.txt", b"x")

    def _boom(path):
        raise PermissionError("read-only")

    monkeypatch.setattr(os, "remove", _boom)

    assert local_storage.delete(DOCUMENTS, "locked.txt") is False


def test_names_are_flat(local_storage: FileStorage):
    path = local_storage.path_for(DOCUMENTS, "../../etc/passwd")

    assert os.path.dirname(path) == local_storage.dirs[DOCUMENTS]
    with pytest.raises(StorageError):
        local_storage.path_for("other-bucket", "x")


def test_generated_names():
    assert FileStorage.profile_image_name("me.JPG", 7) == "7.jpg"
    assert FileStorage.profile_image_name("me.png").endswith(".png")
    assert FileStorage.document_name("dir/cv.pdf").endswith("-cv.pdf")
    assert FileStorage.webp_name().endswith(".webp")
    assert FileStorage.webp_name() != FileStorage.webp_name()
    assert FileStorage.document_name("cv.pdf") != FileStorage.document_name("cv.pdf")
    assert FileStorage.profile_image_name("me.png") != FileStorage.profile_image_name("me.png")


def test_public_url(local_storage: FileStorage):
    assert local_storage.public_url("http://api.local/", DOCUMENTS, "a.webp") == \
        "http://api.local/uploads/documents/a.webp"
