"""
Employee Directory API - Firestore Document Repository
=======================================================

What:  DocumentRepository backed by Google Cloud Firestore.
How:   Uses the async Firestore client authenticated with a service account
       built from FIREBASE_PROJECT_ID / FIREBASE_CLIENT_EMAIL / FIREBASE_PRIVATE_KEY.
Who:   Selected by DOCUMENT_STORE=firestore (the production configuration).

Firestore mapping:
    create_document     → collection(c).add(data)           (auto-id)
    get_documents       → collection(c).get()
    get_document_by_id  → collection(c).document(id).get()  (exists flag kept)
    update_document     → collection(c).document(id).update(data)
    delete_document     → collection(c).document(id).delete()
"""

import logging
from typing import Any, Dict, List, Optional

from google.cloud import firestore
from google.oauth2 import service_account

from employee_directory.config import Settings, settings
from employee_directory.repositories.base import DocumentRepository, StoredDocument

logger = logging.getLogger(__name__)

GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"


class FirestoreDocumentRepository(DocumentRepository):
    """Thin adapter over `google.cloud.firestore.AsyncClient`."""

    def __init__(self, client: firestore.AsyncClient, timeout: Optional[float] = None):
        super().__init__(timeout)
        self._client = client

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "FirestoreDocumentRepository":
        """Build the client from service-account values in the environment."""
        credentials = service_account.Credentials.from_service_account_info(
            {
                "type": "service_account",
                "project_id": config.firebase_project_id,
                "client_email": config.firebase_client_email,
                "private_key": config.firebase_private_key_pem,
                "token_uri": GOOGLE_TOKEN_URI,
            }
        )
        client = firestore.AsyncClient(
            project=config.firebase_project_id,
            credentials=credentials,
        )
        logger.info("Firestore client created for project %s", config.firebase_project_id)
        return cls(client=client, timeout=config.store_timeout_seconds)

    async def _create(self, collection: str, data: Dict[str, Any]) -> str:
        _, reference = await self._client.collection(collection).add(data)
        return reference.id

    async def _list(self, collection: str) -> List[StoredDocument]:
        snapshots = await self._client.collection(collection).get()
        return [
            StoredDocument(id=snapshot.id, data=snapshot.to_dict() or {})
            for snapshot in snapshots
        ]

    async def _get(self, collection: str, document_id: str) -> Optional[StoredDocument]:
        snapshot = await self._client.collection(collection).document(document_id).get()
        return StoredDocument(
            id=snapshot.id,
            data=snapshot.to_dict() or {},
            exists=bool(snapshot.exists),
        )

    async def _update(self, collection: str, document_id: str, data: Dict[str, Any]) -> None:
        await self._client.collection(collection).document(document_id).update(data)

    async def _delete(self, collection: str, document_id: str) -> None:
        await self._client.collection(collection).document(document_id).delete()
