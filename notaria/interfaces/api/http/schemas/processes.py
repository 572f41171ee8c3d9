"""
===============================================================================
TARJETA CRC — schemas/processes.py
===============================================================================

Módulo:
    Schemas HTTP para Procesos (expedientes)

Responsabilidades:
    - DTOs de request/response de /api/processes.
    - Validar largos (repertorio/caratula/cliente) con límites desde settings.
    - Validar forma de email_cliente cuando viene informado.

Reglas:
    - El alta NO declara `estado`: si el cliente lo manda, se ignora.
    - El cambio de estado recibe texto libre; el catálogo lo valida el caso
      de uso (INVALID_STATE), no Pydantic.

Colaboradores:
    - crosscutting.config.get_settings (límites)
    - domain.entities.ProcessState
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated
from uuid import UUID

from notaria.application.usecases.users.credentials import is_valid_email
from notaria.crosscutting.config import get_settings
from notaria.domain.entities import ProcessState
from pydantic import BaseModel, ConfigDict, Field, field_validator

_settings = get_settings()


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class CreateProcessReq(BaseModel):
    """Request para abrir un expediente."""

    model_config = ConfigDict(extra="ignore")

    repertorio: Annotated[
        str,
        Field(
            ...,
            min_length=1,
            max_length=_settings.max_repertorio_chars,
            description="Número de repertorio",
        ),
    ]
    caratula: str | None = Field(
        default=None, max_length=_settings.max_caratula_chars
    )
    cliente: str | None = Field(default=None, max_length=_settings.max_cliente_chars)
    email_cliente: str | None = Field(
        default=None, max_length=_settings.max_email_chars
    )

    @field_validator("repertorio")
    @classmethod
    def strip_repertorio(cls, v: str) -> str:
        return v.strip()

    @field_validator("email_cliente")
    @classmethod
    def check_email_cliente(cls, v: str | None) -> str | None:
        if v and not is_valid_email(v.strip()):
            raise ValueError("email_cliente debe ser un email válido")
        return v


class UpdateProcessStateReq(BaseModel):
    """Request para cambiar el estado."""

    estado: str = Field(
        ...,
        description="Uno de: " + ", ".join(s.value for s in ProcessState),
    )


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class ProcessRes(BaseModel):
    id: UUID
    repertorio: str
    caratula: str | None = None
    cliente: str | None = None
    email_cliente: str | None = None
    estado: ProcessState
    owner_id: UUID
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProcessesListRes(BaseModel):
    processes: list[ProcessRes]
    count: int


class DeleteProcessRes(BaseModel):
    process_id: UUID
    deleted: bool
