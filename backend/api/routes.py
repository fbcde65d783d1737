"""
API route aggregator: register endpoints; no logic, only include the area routers.
"""

from fastapi import APIRouter

from backend.api import assignments, auth, chat, contact, directory, messages, reports, uploads, users

router = APIRouter()


# --- System ---

@router.get("/", tags=["system"])
def root():
    return {"status": "LH Partners backend running"}


@router.get("/health", tags=["system"])
def health():
    return {"ok": True}


api_router = APIRouter(prefix="/api")
for module in (auth, users, directory, assignments, reports, contact, messages, uploads, chat):
    api_router.include_router(module.router)

router.include_router(api_router)
