# evaltrack/api/router.py
from fastapi import APIRouter
from evaltrack.api.routes import admin, requests, files, directory, pi_monitoring

api_router = APIRouter(prefix="/api")
api_router.include_router(admin.router, tags=["admin"])
api_router.include_router(requests.router, prefix="/requests", tags=["requests"])
api_router.include_router(files.router, tags=["files"])
api_router.include_router(directory.router, tags=["directory"])
api_router.include_router(pi_monitoring.router, prefix="/pi-monitoring", tags=["pi-monitoring"])


@api_router.get("")
async def api_root():
    return {"message": "API is running"}
