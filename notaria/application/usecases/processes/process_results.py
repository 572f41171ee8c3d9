"""
===============================================================================
PROCESS USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Business Goal:
    Contrato estable de resultados y errores para los casos de uso de
    procesos (expedientes). Los use cases NO lanzan excepciones de negocio:
    devuelven un resultado tipado que la capa HTTP mapea a status codes.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    process_results models (module)

Responsibilities:
    - ProcessErrorCode: VALIDATION_ERROR / INVALID_STATE / NOT_FOUND.
    - ProcessError (code + message).
    - ProcessResult, ProcessListResult, DeleteProcessResult.

Collaborators:
    - domain.entities.Process
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ....domain.entities import Process


class ProcessErrorCode(str, Enum):
    """
    Códigos:
      - VALIDATION_ERROR: input inválido (ej: repertorio vacío).
      - INVALID_STATE: estado fuera del catálogo.
      - NOT_FOUND: proceso inexistente o de otro usuario (misma respuesta).
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_STATE = "INVALID_STATE"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class ProcessError:
    code: ProcessErrorCode
    message: str


@dataclass
class ProcessResult:
    """Resultado con un único proceso (éxito) o error."""

    process: Process | None = None
    error: ProcessError | None = None


@dataclass
class ProcessListResult:
    processes: List[Process] = field(default_factory=list)
    error: ProcessError | None = None


@dataclass
class DeleteProcessResult:
    deleted: bool = False
    error: ProcessError | None = None


def process_not_found() -> ProcessError:
    # R: mismo mensaje para "no existe" y "no es tuyo".
    return ProcessError(
        code=ProcessErrorCode.NOT_FOUND,
        message="Process not found.",
    )
