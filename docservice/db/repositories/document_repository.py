from typing import List, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from docservice.core.errors import DocumentNotFoundError
from docservice.db.models.document import (
    Document as DocumentModel,
    DocumentGroup as DocumentGroupModel,
    GroupEntry as GroupEntryModel,
)
from docservice.domains.documents.entities import Document, Entry, Group


class DocumentRepository:
    """Репозиторий для работы с документами.

    Каждая операция открывает собственную сессию, поэтому один экземпляр
    репозитория можно использовать из параллельных запросов.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def insert(self, document: Document) -> Document:
        """Создание документа, id назначает база"""
        db_document = DocumentModel(
            title=document.title,
            internal_note=document.internal_note,
            groups=self._groups_to_models(document.groups),
        )

        async with self.session_factory() as session:
            session.add(db_document)
            await session.commit()
            return self._to_domain(db_document)

    async def update(self, document: Document) -> None:
        """Полная замена документа по id"""
        async with self.session_factory() as session:
            db_document = await self._load(session, document.id)

            db_document.title = document.title
            db_document.internal_note = document.internal_note
            db_document.groups = self._groups_to_models(document.groups)

            await session.commit()

    async def delete(self, document_id: int) -> None:
        """Удаление документа вместе с группами и записями"""
        async with self.session_factory() as session:
            db_document = await self._load(session, document_id)
            await session.delete(db_document)
            await session.commit()

    async def get(self, document_id: int) -> Document:
        """Получение документа по id"""
        async with self.session_factory() as session:
            db_document = await self._load(session, document_id)
            return self._to_domain(db_document)

    async def list(self, limit: int, offset: int) -> Tuple[List[Document], int]:
        """Страница документов и общее количество"""
        async with self.session_factory() as session:
            total = await session.scalar(select(func.count(DocumentModel.id)))

            result = await session.execute(
                select(DocumentModel)
                .order_by(DocumentModel.id)
                .offset(offset)
                .limit(limit)
            )
            db_documents = result.scalars().all()
            return [self._to_domain(doc) for doc in db_documents], total or 0

    async def _load(self, session: AsyncSession, document_id: int) -> DocumentModel:
        result = await session.execute(
            select(DocumentModel).where(DocumentModel.id == document_id)
        )
        db_document = result.scalar_one_or_none()
        if db_document is None:
            raise DocumentNotFoundError(document_id)
        return db_document

    def _groups_to_models(self, groups: List[Group]) -> List[DocumentGroupModel]:
        return [
            DocumentGroupModel(
                position=position,
                sort=group.sort,
                name=group.name,
                internal_note=group.internal_note,
                entries=[
                    GroupEntryModel(
                        position=entry_position,
                        key=entry.key,
                        value=entry.value,
                        internal_note=entry.internal_note,
                    )
                    for entry_position, entry in enumerate(group.entries)
                ],
            )
            for position, group in enumerate(groups)
        ]

    def _to_domain(self, db_document: DocumentModel) -> Document:
        """Преобразование модели БД в доменную сущность"""
        return Document(
            id=db_document.id,
            title=db_document.title,
            internal_note=db_document.internal_note,
            groups=[
                Group(
                    sort=db_group.sort,
                    name=db_group.name,
                    internal_note=db_group.internal_note,
                    entries=[
                        Entry(key=db_entry.key, value=db_entry.value, internal_note=db_entry.internal_note)
                        for db_entry in db_group.entries
                    ],
                )
                for db_group in db_document.groups
            ],
        )
