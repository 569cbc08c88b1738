# evaltrack/services/file_service.py
import logging
import re
import time
from pathlib import Path
from fastapi import UploadFile
from evaltrack.core.config import settings
from evaltrack.core.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

URL_PREFIX = "/uploads"
CHUNK_SIZE = 64 * 1024
_UNSAFE = re.compile(r"[^A-Za-z0-9._-]+")

MIME_BY_EXT = {
    "jpeg": "image/jpeg",
    "jpg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "pdf": "application/pdf",
}


def upload_root() -> Path:
    root = Path(settings.upload_dir)
    root.mkdir(parents=True, exist_ok=True)
    return root


def safe_name(original: str) -> str:
    name = _UNSAFE.sub("_", Path(original or "").name).strip("._")
    return name or "file"


def validate_type(original: str, content_type: str | None):
    ext = Path(original or "").suffix.lower().lstrip(".")
    allowed = [e.lower() for e in settings.allowed_upload_extensions]
    if ext not in allowed:
        raise ValidationError("Error: File type not supported!")
    # el mimetype también debe ser de los permitidos (igual que el filtro de multer)
    if content_type and not any(a in content_type.lower() for a in allowed):
        raise ValidationError("Error: File type not supported!")


def validate_size(size: int):
    if size > settings.max_upload_bytes:
        raise ValidationError(f"File exceeds {settings.max_upload_mb} MB")


async def read_limited(file: UploadFile) -> bytes:
    """Lee el upload por bloques y corta en cuanto supera max_upload_bytes."""
    if file.size is not None:
        validate_size(file.size)
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(CHUNK_SIZE)
        if not chunk:
            break
        total += len(chunk)
        validate_size(total)
        chunks.append(chunk)
    return b"".join(chunks)


def store(data: bytes, original: str) -> str:
    """Guarda bytes y devuelve la ruta pública (/uploads/<ms>_<nombre>)."""
    filename = f"{int(time.time() * 1000)}_{safe_name(original)}"
    (upload_root() / filename).write_bytes(data)
    logger.info("store: %s (%d bytes)", filename, len(data))
    return f"{URL_PREFIX}/{filename}"


def resolve(path_or_name: str) -> Path:
    """Ruta en disco para /uploads/<archivo> o <archivo>; rechaza path traversal."""
    name = path_or_name[len(URL_PREFIX) + 1:] if path_or_name.startswith(URL_PREFIX + "/") else path_or_name
    root = upload_root().resolve()
    target = (root / name).resolve()
    if target.parent != root:
        raise NotFoundError("File not found")
    if not target.is_file():
        raise NotFoundError("File not found")
    return target


def retrieve(path_or_name: str) -> bytes:
    return resolve(path_or_name).read_bytes()


async def save_upload(file: UploadFile | None) -> tuple[str, str]:
    """Valida y guarda un UploadFile; devuelve (url, nombre original)."""
    if file is None or not file.filename:
        raise ValidationError("No file uploaded")
    try:
        validate_type(file.filename, file.content_type)
        data = await read_limited(file)
    except ValidationError:
        logger.warning("save_upload: rechazado %s (%s)", file.filename, file.content_type)
        raise
    return store(data, file.filename), file.filename
