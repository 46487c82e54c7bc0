"""Minimal async Firestore REST v1 client for the task store.

Covers what the store needs and nothing more: create a document with a
chosen id, read it, patch selected fields, delete it, and run an equality
query with ordering. Access tokens come from google-auth service account
credentials; HTTP goes through a shared httpx.AsyncClient.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from typing import Any

import httpx

from tasknest.infrastructure.firebase._rest_encoding import (
    decode_fields,
    encode_fields,
    encode_value,
)

_FIRESTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
_BASE = "https://firestore.googleapis.com/v1"

_OPERATORS = {"==": "EQUAL", "<": "LESS_THAN", ">": "GREATER_THAN"}


def _get_credentials(key_dict: dict):
    """Service account credentials scoped for Firestore."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=[_FIRESTORE_SCOPE]
    )


def _refresh_token(credentials) -> str:
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


class DocumentExistsError(Exception):
    """createDocument answered 409: the id is taken."""


class DocumentSnapshot:
    """Document id plus decoded fields."""

    def __init__(self, id_: str, data: dict[str, Any]):
        self.id = id_
        self._data = data

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> DocumentSnapshot:
        return cls(doc.get("name", "").rsplit("/", 1)[-1], decode_fields(doc.get("fields")))

    def to_dict(self) -> dict[str, Any]:
        return self._data


class DocumentReference:
    def __init__(self, client: FirestoreRESTClient, path: str):
        self._client = client
        self._path = path

    @property
    def id(self) -> str:
        return self._path.rsplit("/", 1)[-1]

    async def get(self) -> DocumentSnapshot | None:
        """Current document, or None if it does not exist."""
        out = await self._client.request("GET", self._path)
        return DocumentSnapshot.from_document(out) if out else None

    async def update(self, data: dict[str, Any]) -> DocumentSnapshot | None:
        """Patch only the given fields of an existing document.

        Returns the document after the patch, or None if it no longer exists
        (the exists precondition keeps a patch from recreating it).
        """
        params = [("updateMask.fieldPaths", name) for name in data]
        params.append(("currentDocument.exists", "true"))
        try:
            out = await self._client.request(
                "PATCH", self._path, params=params, body=encode_fields(data)
            )
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 400 and "FAILED_PRECONDITION" in e.response.text:
                return None
            raise
        return DocumentSnapshot.from_document(out) if out else None

    async def delete(self) -> None:
        """Delete the document; a missing document is not an error."""
        await self._client.request("DELETE", self._path)


class Query:
    """Equality filters (ANDed) and ordering over one collection, run with runQuery."""

    def __init__(self, client: FirestoreRESTClient, collection_id: str):
        self._client = client
        self._collection_id = collection_id
        self._filters: list[dict[str, Any]] = []
        self._orders: list[dict[str, Any]] = []

    def where(self, field: str, op: str, value: Any) -> Query:
        self._filters.append(
            {
                "fieldFilter": {
                    "field": {"fieldPath": field},
                    "op": _OPERATORS.get(op, op),
                    "value": encode_value(value),
                }
            }
        )
        return self

    def order_by(self, field: str, direction: str = "ASCENDING") -> Query:
        self._orders.append({"field": {"fieldPath": field}, "direction": direction})
        return self

    def to_structured_query(self) -> dict[str, Any]:
        query: dict[str, Any] = {"from": [{"collectionId": self._collection_id}]}
        if len(self._filters) == 1:
            query["where"] = self._filters[0]
        elif self._filters:
            query["where"] = {"compositeFilter": {"op": "AND", "filters": self._filters}}
        if self._orders:
            query["orderBy"] = self._orders
        return query

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """Yield matching documents in query order."""
        out = await self._client.request(
            "POST", ":runQuery", body={"structuredQuery": self.to_structured_query()}
        )
        # An empty result is a single entry with readTime and no document.
        for item in out or []:
            if "document" in item:
                yield DocumentSnapshot.from_document(item["document"])


class CollectionReference:
    def __init__(self, client: FirestoreRESTClient, collection_id: str):
        self._client = client
        self._collection_id = collection_id

    def document(self, document_id: str) -> DocumentReference:
        return DocumentReference(self._client, f"/{self._collection_id}/{document_id}")

    async def create(self, document_id: str, data: dict[str, Any]) -> None:
        """Create the document; raises DocumentExistsError if the id is taken."""
        await self._client.request(
            "POST",
            f"/{self._collection_id}",
            params=[("documentId", document_id)],
            body=encode_fields(data),
        )

    def where(self, field: str, op: str, value: Any) -> Query:
        return Query(self._client, self._collection_id).where(field, op, value)


class FirestoreRESTClient:
    """Firestore REST client bound to one project's default database.

    Args:
        project_id: GCP project holding the database.
        credentials: google-auth credentials (token refreshed when stale).
        http_client: Shared httpx client; closed by aclose() only if created here.
        timeout: Request timeout for a client created here.
    """

    def __init__(
        self,
        project_id: str,
        credentials,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._credentials = credentials
        self._documents_url = f"{_BASE}/projects/{project_id}/databases/(default)/documents"
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str:
        """Valid access token; a refresh runs in a worker thread (google-auth is sync)."""
        return await asyncio.to_thread(_refresh_token, self._credentials)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: list[tuple[str, str]] | None = None,
        body: dict[str, Any] | None = None,
    ) -> Any:
        """Call the documents endpoint. path is relative to the database documents root.

        Returns the decoded JSON body, or None for 404 and empty bodies.

        Raises:
            DocumentExistsError: On 409.
            httpx.HTTPStatusError: On any other error status.
            httpx.TransportError: On network failures.
        """
        headers = {"Authorization": f"Bearer {await self.get_token()}"}
        resp = await self._http.request(
            method, f"{self._documents_url}{path}", params=params, json=body, headers=headers
        )
        if resp.status_code == 404:
            return None
        if resp.status_code == 409:
            raise DocumentExistsError(f"Document already exists: {path}")
        resp.raise_for_status()
        if not resp.content:
            return None
        return resp.json()

    def collection(self, collection_id: str) -> CollectionReference:
        return CollectionReference(self, collection_id)
