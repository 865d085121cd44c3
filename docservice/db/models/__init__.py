from docservice.db.models.document import Document, DocumentGroup, GroupEntry

__all__ = [
    "Document",
    "DocumentGroup",
    "GroupEntry"
]
