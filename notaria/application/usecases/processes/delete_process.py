"""
===============================================================================
USE CASE: Delete Process
===============================================================================

Borrado físico, solo owner, sin papelera ni recuperación.
Ajeno o inexistente -> NOT_FOUND.
===============================================================================
"""

from __future__ import annotations

import logging
from uuid import UUID

from ....domain.ownership_policy import Actor, owns_process
from ....domain.repositories import ProcessRepository
from .process_results import DeleteProcessResult, process_not_found

logger = logging.getLogger(__name__)


class DeleteProcessUseCase:
    def __init__(self, repository: ProcessRepository) -> None:
        self._processes = repository

    def execute(self, process_id: UUID, actor: Actor | None) -> DeleteProcessResult:
        process = self._processes.get_process(process_id)
        if process is None or not owns_process(process, actor):
            return DeleteProcessResult(error=process_not_found())

        if not self._processes.delete_process(process.id, process.owner_id):
            return DeleteProcessResult(error=process_not_found())

        logger.info("proceso eliminado", extra={"process_id": str(process.id)})
        return DeleteProcessResult(deleted=True)
