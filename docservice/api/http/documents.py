from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from docservice.api.deps import get_document_service
from docservice.core.errors import DocumentNotFoundError
from docservice.domains.documents.mapper import project_page, to_projection
from docservice.domains.documents.schemas import (
    DocumentCreate, DocumentUpdate, DocumentProjection, DocumentListResponse
)
from docservice.domains.documents.services import DocumentService

router = APIRouter(prefix="/documents", tags=["documents"])

CACHE_HEADER = "X-Cache"


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Document not found"
    )


@router.post("", response_model=DocumentProjection, status_code=status.HTTP_201_CREATED)
async def create_document(
    document_data: DocumentCreate,
    document_service: DocumentService = Depends(get_document_service)
):
    """Создание нового документа"""
    document = await document_service.create(document_data.to_entity())
    return to_projection(document)


@router.get("", response_model=DocumentListResponse)
async def list_documents(
    limit: int = Query(20, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    document_service: DocumentService = Depends(get_document_service)
):
    """Получение списка документов"""
    page = await document_service.list(limit, offset)

    return DocumentListResponse(
        items=await project_page(page.items),
        total=page.total,
        limit=page.limit,
        offset=page.offset
    )


@router.get("/{document_id}", response_model=DocumentProjection)
async def get_document(
    document_id: int,
    response: Response,
    document_service: DocumentService = Depends(get_document_service)
):
    """Получение документа по id"""
    try:
        projection, cache_hit = await document_service.get_projection(document_id)
    except DocumentNotFoundError:
        raise _not_found()

    response.headers[CACHE_HEADER] = "HIT" if cache_hit else "MISS"
    return projection


@router.put("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_document(
    document_id: int,
    update_data: DocumentUpdate,
    document_service: DocumentService = Depends(get_document_service)
):
    """Полная замена документа"""
    try:
        await document_service.update(update_data.to_entity(document_id))
    except DocumentNotFoundError:
        raise _not_found()

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: int,
    document_service: DocumentService = Depends(get_document_service)
):
    """Удаление документа"""
    try:
        await document_service.delete(document_id)
    except DocumentNotFoundError:
        raise _not_found()

    return Response(status_code=status.HTTP_204_NO_CONTENT)
