from pydantic import BaseModel, ConfigDict, Field
from typing import List

from docservice.domains.documents.entities import Document, Entry, Group


class EntryIn(BaseModel):
    """Запись группы во входящем документе"""
    key: str = ""
    value: str = ""
    internal_note: str = ""

    model_config = ConfigDict(extra="forbid")


class GroupIn(BaseModel):
    """Группа во входящем документе"""
    sort: int = 0
    name: str = ""
    internal_note: str = ""
    entries: List[EntryIn] = Field(default_factory=list, alias="level2")

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class DocumentCreate(BaseModel):
    """Схема для создания документа.

    Неизвестные поля отклоняются. Переданный клиентом id игнорируется:
    идентификатор назначает хранилище.
    """
    id: int = 0
    title: str = ""
    internal_note: str = ""
    groups: List[GroupIn] = Field(default_factory=list, alias="level1")

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    def to_entity(self) -> Document:
        return Document(
            id=0,
            title=self.title,
            internal_note=self.internal_note,
            groups=[
                Group(
                    sort=group.sort,
                    name=group.name,
                    internal_note=group.internal_note,
                    entries=[
                        Entry(key=entry.key, value=entry.value, internal_note=entry.internal_note)
                        for entry in group.entries
                    ],
                )
                for group in self.groups
            ],
        )


class EntryUpdate(EntryIn):
    model_config = ConfigDict(extra="ignore")


class GroupUpdate(GroupIn):
    entries: List[EntryUpdate] = Field(default_factory=list, alias="level2")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class DocumentUpdate(DocumentCreate):
    """Схема для полной замены документа.

    Неизвестные поля игнорируются на всех уровнях. id из тела запроса
    перезаписывается идентификатором из пути.
    """
    groups: List[GroupUpdate] = Field(default_factory=list, alias="level1")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    def to_entity(self, document_id: int) -> Document:
        document = super().to_entity()
        document.id = document_id
        return document


class EntryOut(BaseModel):
    key: str
    value: str


class GroupOut(BaseModel):
    sort: int
    name: str
    entries: List[EntryOut] = Field(default_factory=list, alias="level2")

    model_config = ConfigDict(populate_by_name=True)


class DocumentProjection(BaseModel):
    """Внешнее представление документа, без служебных полей"""
    id: int
    title: str
    groups: List[GroupOut] = Field(default_factory=list, alias="level1")

    model_config = ConfigDict(populate_by_name=True)


class DocumentListResponse(BaseModel):
    """Схема для списка документов"""
    items: List[DocumentProjection]
    total: int
    limit: int
    offset: int
