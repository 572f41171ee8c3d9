"""
===============================================================================
USE CASE: Get Process
===============================================================================

Lee un proceso por ID. Si no existe o pertenece a otro usuario se responde
NOT_FOUND en ambos casos, para no revelar la existencia de expedientes ajenos.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.ownership_policy import Actor, owns_process
from ....domain.repositories import ProcessRepository
from .process_results import ProcessResult, process_not_found


class GetProcessUseCase:
    def __init__(self, repository: ProcessRepository) -> None:
        self._processes = repository

    def execute(self, process_id: UUID, actor: Actor | None) -> ProcessResult:
        process = self._processes.get_process(process_id)
        if process is None or not owns_process(process, actor):
            return ProcessResult(error=process_not_found())
        return ProcessResult(process=process)
