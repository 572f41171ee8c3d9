"""
===============================================================================
PROCESS USE CASES PACKAGE (Public API / Exports)
===============================================================================

Punto único de importación para los casos de uso de procesos (expedientes)
y sus resultados tipados.
===============================================================================
"""

from __future__ import annotations

from .change_process_state import ChangeProcessStateUseCase
from .create_process import CreateProcessInput, CreateProcessUseCase
from .delete_process import DeleteProcessUseCase
from .get_process import GetProcessUseCase
from .list_processes import ListProcessesUseCase, ProcessView
from .process_results import (
    DeleteProcessResult,
    ProcessError,
    ProcessErrorCode,
    ProcessListResult,
    ProcessResult,
)

__all__ = [
    # Use Cases
    "ChangeProcessStateUseCase",
    "CreateProcessInput",
    "CreateProcessUseCase",
    "DeleteProcessUseCase",
    "GetProcessUseCase",
    "ListProcessesUseCase",
    "ProcessView",
    # Results
    "DeleteProcessResult",
    "ProcessError",
    "ProcessErrorCode",
    "ProcessListResult",
    "ProcessResult",
]
