import asyncio
from typing import List, Optional, Sequence

from docservice.domains.documents.entities import Document
from docservice.domains.documents.schemas import DocumentProjection, EntryOut, GroupOut


def to_projection(document: Document) -> DocumentProjection:
    """Преобразование документа во внешнее представление.

    Копирует id, title и для каждой группы sort, name и пары key/value.
    Служебные поля не переносятся. Результат не разделяет изменяемых
    структур с исходным документом.
    """
    return DocumentProjection(
        id=document.id,
        title=document.title,
        groups=[
            GroupOut(
                sort=group.sort,
                name=group.name,
                entries=[EntryOut(key=entry.key, value=entry.value) for entry in group.entries],
            )
            for group in document.groups
        ],
    )


async def project_page(documents: Sequence[Document]) -> List[DocumentProjection]:
    """Параллельное преобразование страницы документов.

    Каждый документ обрабатывается отдельной задачей, результат пишется
    в свою ячейку заранее выделенного списка, поэтому порядок выхода
    совпадает с порядком входа независимо от порядка завершения задач.
    """
    items: List[Optional[DocumentProjection]] = [None] * len(documents)

    async def fill(index: int, document: Document) -> None:
        items[index] = await asyncio.to_thread(to_projection, document)

    await asyncio.gather(*(fill(i, document) for i, document in enumerate(documents)))
    return items
