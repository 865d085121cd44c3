from typing import Optional

from docservice.domains.documents.entities import Document


def normalize_document(document: Optional[Document]) -> None:
    """Приведение групп документа к каноническому порядку.

    Группы сортируются на месте по убыванию sort. Сортировка стабильная:
    группы с одинаковым sort сохраняют исходный относительный порядок.
    Остальные поля не меняются, повторный вызов ничего не меняет.
    """
    if document is None or len(document.groups) <= 1:
        return

    document.groups.sort(key=lambda group: group.sort, reverse=True)
