"""Schemas for sign-in, sign-up and the current user."""

from typing import Any

from pydantic import BaseModel, Field


class SignInRequest(BaseModel):
    """Request body for POST /api/auth/signin."""

    email: str = Field(..., min_length=1, description="Registered email.")
    password: str = Field(..., min_length=1, description="Password (required, not verified).")


class SignUpRequest(BaseModel):
    """Request body for POST /api/auth/signup. Existing emails keep their role."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    nombre: str = Field(..., min_length=1)
    apellido: str = Field("", description="Last name; empty when omitted.")
    rol: str = Field("cliente", description="cliente | arquitecto | gestor")


class AuthResponse(BaseModel):
    """Response for sign-in and sign-up: where the frontend should go next."""

    success: bool = True
    redirectUrl: str = Field(..., description="Dashboard path for the user's role.")
    user: dict[str, Any] = Field(..., description="Session payload: userId, email, rol, nombre, apellido.")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "success": True,
                    "redirectUrl": "/dashboard/gestor",
                    "user": {"userId": 1, "email": "gestor@lhpartners.es", "rol": "gestor", "nombre": "Laura", "apellido": "Hidalgo"},
                }
            ]
        }
    }
