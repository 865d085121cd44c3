from docservice.domains.documents.entities import Document, DocumentPage, Entry, Group
from docservice.domains.documents.schemas import (
    DocumentCreate, DocumentUpdate, DocumentProjection, DocumentListResponse,
    EntryIn, EntryOut, GroupIn, GroupOut
)
from docservice.domains.documents.normalizer import normalize_document
from docservice.domains.documents.mapper import to_projection, project_page
from docservice.domains.documents.services import DocumentService

__all__ = [
    "Document", "DocumentPage", "Entry", "Group",
    "DocumentCreate", "DocumentUpdate", "DocumentProjection", "DocumentListResponse",
    "EntryIn", "EntryOut", "GroupIn", "GroupOut",
    "normalize_document", "to_projection", "project_page",
    "DocumentService"
]
