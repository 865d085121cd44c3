from fastapi import Request

from docservice.domains.documents.services import DocumentService


def get_document_service(request: Request) -> DocumentService:
    """Сервис документов, собранный при старте приложения"""
    return request.app.state.document_service
