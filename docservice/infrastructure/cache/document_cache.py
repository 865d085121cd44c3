from abc import ABC, abstractmethod
from typing import Optional, Tuple

from docservice.domains.documents.schemas import DocumentProjection


class DocumentCache(ABC):
    """Кеш внешних представлений документов по id.

    Реализация сама задаёт TTL записей и не ходит в хранилище. Ошибки
    транспорта поднимаются как CacheDegradedError, отсутствие ключа
    возвращается как (None, False).
    """

    @abstractmethod
    async def get(self, document_id: int) -> Tuple[Optional[DocumentProjection], bool]:
        ...

    @abstractmethod
    async def set(self, document_id: int, projection: DocumentProjection) -> None:
        ...

    @abstractmethod
    async def delete(self, document_id: int) -> None:
        ...
