class DocumentServiceError(Exception):
    """Базовая ошибка сервиса документов"""


class DocumentNotFoundError(DocumentServiceError):
    """Документ с указанным идентификатором отсутствует в хранилище"""

    def __init__(self, document_id: int):
        self.document_id = document_id
        super().__init__(f"Document {document_id} not found")


class CacheDegradedError(DocumentServiceError):
    """Кеш недоступен или вернул ошибку.

    Поднимается только реализацией кеша и всегда перехватывается
    сервисом: запрос продолжается так, будто кеша нет.
    """

    def __init__(self, operation: str, cause: Exception):
        self.operation = operation
        self.cause = cause
        super().__init__(f"cache {operation} failed: {cause}")
