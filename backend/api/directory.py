"""
Architect and client directory routes.
"""

from fastapi import APIRouter

from backend.api.handlers import http_errors
from backend.services.directory_service import list_architects, list_clients

router = APIRouter(tags=["directory"])


@router.get("/arquitectos", summary="Architects with their accepted-assignment count")
def get_architects(email: str | None = None) -> dict:
    with http_errors("Error al obtener arquitectos"):
        arquitectos = list_architects(email)
    return {"arquitectos": arquitectos}


@router.get("/clientes", summary="Clients with their report count")
def get_clients(email: str | None = None) -> dict:
    with http_errors("Error al obtener clientes"):
        clientes = list_clients(email)
    return {"clientes": clientes}
