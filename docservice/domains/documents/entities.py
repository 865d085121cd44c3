from dataclasses import dataclass, field
from typing import List


@dataclass
class Entry:
    """Пара ключ/значение внутри группы"""
    key: str
    value: str
    internal_note: str = ""


@dataclass
class Group:
    """Группа записей документа.

    sort используется только для канонического порядка групп и не
    обязан быть уникальным.
    """
    sort: int
    name: str
    entries: List[Entry] = field(default_factory=list)
    internal_note: str = ""


@dataclass
class Document:
    """Сущность документа домена Documents.

    id == 0 означает, что идентификатор ещё не назначен хранилищем.
    """
    id: int
    title: str
    groups: List[Group] = field(default_factory=list)
    internal_note: str = ""


@dataclass
class DocumentPage:
    """Страница документов вместе с общим количеством"""
    items: List[Document]
    total: int
    limit: int
    offset: int
