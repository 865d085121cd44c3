"""
Shared fixtures for document service tests.
"""

import copy
from typing import Dict, List, Optional, Tuple

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from docservice.core.db import create_session_factory, init_models
from docservice.core.errors import CacheDegradedError, DocumentNotFoundError
from docservice.db.repositories.document_repository import DocumentRepository
from docservice.domains.documents.entities import Document, Entry, Group
from docservice.domains.documents.schemas import DocumentProjection
from docservice.domains.documents.services import DocumentService
from docservice.infrastructure.cache.document_cache import DocumentCache


def make_document(title: str = "doc", groups: Optional[List[Tuple[int, str]]] = None, document_id: int = 0) -> Document:
    """Build a document from (sort, name) pairs, one entry per group."""
    groups = groups or []
    return Document(
        id=document_id,
        title=title,
        internal_note="internal",
        groups=[
            Group(
                sort=sort,
                name=name,
                internal_note=f"note-{name}",
                entries=[Entry(key=f"{name}-key", value=f"{name}-value", internal_note="secret")],
            )
            for sort, name in groups
        ],
    )


class InMemoryDocumentCache(DocumentCache):
    """Dict-backed cache that stores serialized projections like Redis does."""

    def __init__(self):
        self.data: Dict[int, str] = {}
        self.fail_get = False
        self.fail_set = False
        self.fail_delete = False
        self.gets = 0
        self.sets = 0
        self.deletes = 0

    async def get(self, document_id: int):
        self.gets += 1
        if self.fail_get:
            raise CacheDegradedError("get", ConnectionError("redis down"))
        raw = self.data.get(document_id)
        if raw is None:
            return None, False
        return DocumentProjection.model_validate_json(raw), True

    async def set(self, document_id: int, projection: DocumentProjection) -> None:
        self.sets += 1
        if self.fail_set:
            raise CacheDegradedError("set", ConnectionError("redis down"))
        self.data[document_id] = projection.model_dump_json(by_alias=True)

    async def delete(self, document_id: int) -> None:
        self.deletes += 1
        if self.fail_delete:
            raise CacheDegradedError("delete", ConnectionError("redis down"))
        self.data.pop(document_id, None)

    async def ping(self) -> bool:
        return not self.fail_get


class FakeDocumentRepository:
    """In-memory store.

    With reverse_groups enabled, groups come back in reverse order to mimic a
    store that gives no ordering guarantee for nested collections.
    """

    def __init__(self, reverse_groups: bool = False):
        self.documents: Dict[int, Document] = {}
        self.next_id = 1
        self.reverse_groups = reverse_groups
        self.gets = 0

    async def insert(self, document: Document) -> Document:
        stored = copy.deepcopy(document)
        stored.id = self.next_id
        self.next_id += 1
        self.documents[stored.id] = stored
        return copy.deepcopy(stored)

    async def update(self, document: Document) -> None:
        if document.id not in self.documents:
            raise DocumentNotFoundError(document.id)
        self.documents[document.id] = copy.deepcopy(document)

    async def delete(self, document_id: int) -> None:
        if document_id not in self.documents:
            raise DocumentNotFoundError(document_id)
        del self.documents[document_id]

    async def get(self, document_id: int) -> Document:
        self.gets += 1
        if document_id not in self.documents:
            raise DocumentNotFoundError(document_id)
        return self._out(self.documents[document_id])

    async def list(self, limit: int, offset: int):
        ordered = [self.documents[key] for key in sorted(self.documents)]
        return [self._out(doc) for doc in ordered[offset:offset + limit]], len(ordered)

    def _out(self, document: Document) -> Document:
        result = copy.deepcopy(document)
        if self.reverse_groups:
            result.groups.reverse()
        return result


@pytest.fixture
async def engine():
    """In-memory SQLite engine shared across sessions."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def repository(engine):
    return DocumentRepository(create_session_factory(engine))


@pytest.fixture
def cache():
    return InMemoryDocumentCache()


@pytest.fixture
def document_service(repository, cache):
    return DocumentService(repository, cache)
