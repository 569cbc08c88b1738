# evaltrack/api/routes/files.py
from fastapi import APIRouter, File, Form, UploadFile, Request as FastAPIRequest
from fastapi.responses import FileResponse
from typing import Optional
from evaltrack.core.rate_limit import limiter, UPLOAD_LIMIT
from evaltrack.repositories import requests_repo, directory_repo
from evaltrack.core.errors import NotFoundError
from evaltrack.services import file_service, request_service

router = APIRouter()


async def _attach(request_id: str, file: Optional[UploadFile], url_field: str, name_field: str):
    # primero la solicitud: no dejar archivos huérfanos si el id no existe
    if not await requests_repo.exists(request_id):
        raise NotFoundError(request_service.NOT_FOUND)
    url, name = await file_service.save_upload(file)
    return await request_service.attach_file(request_id, url_field, name_field, url, name)


@router.post("/upload")
@limiter.limit(UPLOAD_LIMIT)
async def upload_evaluator_file(
    request: FastAPIRequest,
    requestId: str = Form(...),
    file: Optional[UploadFile] = File(None),
):
    return await _attach(requestId, file, "fileUrl", "fileName")


@router.post("/requester/upload")
@limiter.limit(UPLOAD_LIMIT)
async def upload_requester_file(
    request: FastAPIRequest,
    requestId: str = Form(...),
    file: Optional[UploadFile] = File(None),
):
    return await _attach(requestId, file, "requesterFileUrl", "requesterFileName")


@router.post("/uploadProfile")
@limiter.limit(UPLOAD_LIMIT)
async def upload_profile_image(
    request: FastAPIRequest,
    evaluatorId: str = Form(...),
    profileImage: Optional[UploadFile] = File(None),
):
    url, _ = await file_service.save_upload(profileImage)
    await directory_repo.upsert_profile_image(evaluatorId, url)
    return {"message": "Profile image uploaded successfully", "filePath": url}


@router.get("/download/{filename}")
async def download(filename: str):
    path = file_service.resolve(filename)
    media_type = file_service.MIME_BY_EXT.get(path.suffix.lower().lstrip("."), "application/octet-stream")
    return FileResponse(path, media_type=media_type, filename=filename)
