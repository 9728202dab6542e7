"""Document type catalog endpoints."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ..datastore import Datastore, get_datastore
from ..params import EntityIdPath
from ..responses import Envelope, ListEnvelope, created_response, success_response
from . import service
from .schemas import DocTypeCreate, DocTypeResponse, DocTypeUpdate

router = APIRouter(prefix="/doctypes", tags=["Document Types"])


@router.get("", response_model=ListEnvelope[DocTypeResponse], summary="List document types")
def list_doctypes(store: Datastore = Depends(get_datastore)) -> JSONResponse:
    return success_response(service.list_doctypes(store))


@router.get(
    "/{doctype_id}",
    response_model=Envelope[DocTypeResponse],
    summary="Get document type by ID",
    responses={404: {"description": "Document type not found"}},
)
def get_doctype(doctype_id: EntityIdPath, store: Datastore = Depends(get_datastore)) -> JSONResponse:
    return success_response(service.get_doctype(store, doctype_id))


@router.post(
    "",
    response_model=Envelope[DocTypeResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a document type",
    responses={
        400: {"description": "Name is required"},
        409: {"description": "Name already exists"},
    },
)
def create_doctype(data: DocTypeCreate, store: Datastore = Depends(get_datastore)) -> JSONResponse:
    doctype = service.create_doctype(store, data.model_dump(exclude_unset=True))
    return created_response(doctype, "Document type created successfully")


@router.put(
    "/{doctype_id}",
    response_model=Envelope[DocTypeResponse],
    summary="Update a document type",
)
def update_doctype(
    doctype_id: EntityIdPath,
    data: DocTypeUpdate,
    store: Datastore = Depends(get_datastore),
) -> JSONResponse:
    doctype = service.update_doctype(store, doctype_id, data.model_dump(exclude_unset=True))
    return success_response(doctype, message="Document type updated successfully")


@router.delete(
    "/{doctype_id}",
    response_model=Envelope[None],
    summary="Delete a document type",
    responses={
        400: {"description": "Document type still has document requests"},
        404: {"description": "Document type not found"},
    },
)
def delete_doctype(doctype_id: EntityIdPath, store: Datastore = Depends(get_datastore)) -> JSONResponse:
    service.delete_doctype(store, doctype_id)
    return success_response(message="Document type deleted successfully")
