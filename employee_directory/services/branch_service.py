"""
Employee Directory API - Branch Service
========================================

What:  Business logic for branches: list, get, create, partial update, delete.
How:   Pass-through calls to the injected DocumentRepository, plus the shared
       not-found and partial-update policies.
Who:   Called by the /branches route handlers.

Policies:
    - Unknown id on get/update/delete → NotFoundError("Branch with ID <id> does not exist"),
      raised before anything is written.
    - Update loads the record, overwrites the supplied fields, writes the full
      merged record back. Load and write are two separate store calls, so two
      concurrent updates of one branch resolve as last-write-wins.
    - Store failures (StoreError) are not caught here.
"""

import logging
from typing import List

from employee_directory.exceptions import NotFoundError
from employee_directory.repositories.base import DocumentRepository, StoredDocument
from employee_directory.schemas.branch import Branch, CreateBranchBody, UpdateBranchBody
from employee_directory.services.merge import apply_partial_update

logger = logging.getLogger(__name__)


class BranchService:
    """Stateless apart from the repository it is given."""

    COLLECTION = "branches"

    def __init__(self, repository: DocumentRepository):
        self.repository = repository

    @staticmethod
    def _to_branch(document: StoredDocument) -> Branch:
        return Branch.model_validate({**document.data, "id": document.id})

    @staticmethod
    def _to_data(branch: Branch) -> dict:
        return branch.model_dump(by_alias=True, exclude={"id"})

    async def get_all_branches(self) -> List[Branch]:
        documents = await self.repository.get_documents(self.COLLECTION)
        return [self._to_branch(document) for document in documents]

    async def get_branch_by_id(self, branch_id: str) -> Branch:
        document = await self.repository.get_document_by_id(self.COLLECTION, branch_id)
        if document is None or not document.exists:
            raise NotFoundError(resource="Branch", resource_id=branch_id)
        return self._to_branch(document)

    async def create_branch(self, payload: CreateBranchBody) -> Branch:
        data = payload.model_dump(by_alias=True)
        branch_id = await self.repository.create_document(self.COLLECTION, data)
        logger.info("Branch created: %s", branch_id)
        return Branch.model_validate({**data, "id": branch_id})

    async def update_branch(self, branch_id: str, payload: UpdateBranchBody) -> Branch:
        existing = await self.get_branch_by_id(branch_id)
        updated = apply_partial_update(existing, payload)
        await self.repository.update_document(self.COLLECTION, branch_id, self._to_data(updated))
        logger.info("Branch updated: %s", branch_id)
        return updated

    async def delete_branch(self, branch_id: str) -> None:
        await self.get_branch_by_id(branch_id)
        await self.repository.delete_document(self.COLLECTION, branch_id)
        logger.info("Branch deleted: %s", branch_id)
