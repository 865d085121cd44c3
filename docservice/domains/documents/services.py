import logging
from typing import Tuple, TYPE_CHECKING

from docservice.core.errors import CacheDegradedError
from docservice.domains.documents.entities import Document, DocumentPage
from docservice.domains.documents.mapper import to_projection
from docservice.domains.documents.normalizer import normalize_document
from docservice.domains.documents.schemas import DocumentProjection

if TYPE_CHECKING:
    from docservice.db.repositories.document_repository import DocumentRepository
    from docservice.infrastructure.cache.document_cache import DocumentCache

logger = logging.getLogger(__name__)


class DocumentService:
    """Сервис для работы с документами.

    Чтение по id идёт через кеш (cache-aside): сначала кеш, при промахе
    хранилище с последующей записью в кеш. Запись идёт только в хранилище,
    после успешного update/delete запись кеша удаляется. Ошибки кеша
    никогда не влияют на результат операции.
    """

    def __init__(self, repository: "DocumentRepository", cache: "DocumentCache"):
        self.repository = repository
        self.cache = cache

    async def create(self, document: Document) -> Document:
        """Создание нового документа"""
        normalize_document(document)

        created = await self.repository.insert(document)
        logger.info(f"Document {created.id} created")
        return created

    async def get_projection(self, document_id: int) -> Tuple[DocumentProjection, bool]:
        """Получение документа по id.

        Возвращает проекцию и признак того, что она взята из кеша.
        """
        try:
            cached, found = await self.cache.get(document_id)
        except CacheDegradedError as e:
            logger.warning(f"Cache read for document {document_id} failed, falling back to store: {e}")
            cached, found = None, False

        if found:
            logger.debug(f"Cache hit for document {document_id}")
            return cached, True

        logger.debug(f"Cache miss for document {document_id}")
        document = await self.repository.get(document_id)
        normalize_document(document)
        projection = to_projection(document)

        try:
            await self.cache.set(document_id, projection)
        except CacheDegradedError as e:
            logger.warning(f"Cache write for document {document_id} failed: {e}")

        return projection, False

    async def update(self, document: Document) -> None:
        """Полная замена документа.

        id документа должен быть выставлен вызывающим кодом из адреса ресурса.
        """
        normalize_document(document)

        await self.repository.update(document)
        logger.info(f"Document {document.id} updated")
        await self._invalidate(document.id)

    async def delete(self, document_id: int) -> None:
        """Удаление документа"""
        await self.repository.delete(document_id)
        logger.info(f"Document {document_id} deleted")
        await self._invalidate(document_id)

    async def list(self, limit: int, offset: int) -> DocumentPage:
        """Страница документов, результаты списка не кешируются"""
        items, total = await self.repository.list(limit, offset)
        for document in items:
            normalize_document(document)

        return DocumentPage(items=items, total=total, limit=limit, offset=offset)

    async def _invalidate(self, document_id: int) -> None:
        # устаревшая запись исправится следующим чтением или истечёт по TTL
        try:
            await self.cache.delete(document_id)
        except CacheDegradedError as e:
            logger.warning(f"Cache invalidation for document {document_id} failed: {e}")
