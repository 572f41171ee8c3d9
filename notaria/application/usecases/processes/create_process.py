"""
===============================================================================
USE CASE: Create Process
===============================================================================

Business Goal:
    Abrir un expediente nuevo para el usuario autenticado.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    CreateProcessUseCase

Responsibilities:
    - Validar repertorio (no vacío luego de strip).
    - Forzar estado inicial Iniciado (el caller no puede elegirlo).
    - Forzar owner_id = actor.user_id (no se crea en nombre de otro).
    - Persistir vía ProcessRepository.

Collaborators:
    - ProcessRepository.create_process
    - process_results

Error Mapping:
    - NOT_FOUND: nunca.
    - VALIDATION_ERROR: actor ausente o repertorio vacío.
===============================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import uuid4

from ....domain.entities import INITIAL_STATE, Process
from ....domain.ownership_policy import Actor
from ....domain.repositories import ProcessRepository
from .process_results import ProcessError, ProcessErrorCode, ProcessResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateProcessInput:
    """DTO de entrada. No hay campo estado: siempre nace Iniciado."""

    repertorio: str
    caratula: str | None = None
    cliente: str | None = None
    email_cliente: str | None = None
    actor: Actor | None = None


class CreateProcessUseCase:
    def __init__(self, repository: ProcessRepository) -> None:
        self._processes = repository

    def execute(self, input_data: CreateProcessInput) -> ProcessResult:
        actor = input_data.actor
        if actor is None or actor.user_id is None:
            return self._validation_error("Actor is required to create a process.")

        repertorio = (input_data.repertorio or "").strip()
        if not repertorio:
            return self._validation_error("Repertorio is required.")

        process = Process(
            id=uuid4(),
            repertorio=repertorio,
            caratula=input_data.caratula,
            cliente=input_data.cliente,
            email_cliente=input_data.email_cliente,
            estado=INITIAL_STATE,
            owner_id=actor.user_id,
        )
        created = self._processes.create_process(process)

        logger.info(
            "proceso creado",
            extra={"process_id": str(created.id), "owner_id": str(created.owner_id)},
        )
        return ProcessResult(process=created)

    @staticmethod
    def _validation_error(message: str) -> ProcessResult:
        return ProcessResult(
            error=ProcessError(code=ProcessErrorCode.VALIDATION_ERROR, message=message)
        )
