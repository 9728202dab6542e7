"""Document request endpoints.

Citizens request documents of a catalogued type; employees move requests
through pending / in_progress / approved / rejected. Every read is enriched
with the owning user's and the document type's display fields.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ..datastore import Datastore, get_datastore
from ..params import EntityIdPath
from ..responses import Envelope, ListEnvelope, created_response, success_response
from . import service
from .schemas import DocumentCreate, DocumentResponse, DocumentUpdate

router = APIRouter(prefix="/documents", tags=["Documents"])


@router.get(
    "",
    response_model=ListEnvelope[DocumentResponse],
    summary="List document requests",
    description="All document requests with user and document type information, newest first."
)
def list_documents(store: Datastore = Depends(get_datastore)) -> JSONResponse:
    return success_response(service.list_documents(store))


@router.get(
    "/user/{user_id}",
    response_model=ListEnvelope[DocumentResponse],
    summary="List a user's document requests",
    responses={404: {"description": "User not found"}},
)
def list_documents_by_user(user_id: EntityIdPath, store: Datastore = Depends(get_datastore)) -> JSONResponse:
    return success_response(service.list_documents_by_user(store, user_id))


@router.get(
    "/{document_id}",
    response_model=Envelope[DocumentResponse],
    summary="Get a document request",
    responses={404: {"description": "Document not found"}},
)
def get_document(document_id: EntityIdPath, store: Datastore = Depends(get_datastore)) -> JSONResponse:
    return success_response(service.get_document(store, document_id))


@router.post(
    "",
    response_model=Envelope[DocumentResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a document request",
    description="Creates a pending request. Both the user and the document type must exist.",
    responses={
        400: {"description": "user_id or doctype_id missing"},
        404: {"description": "User or document type not found"},
    },
)
def create_document(data: DocumentCreate, store: Datastore = Depends(get_datastore)) -> JSONResponse:
    document = service.create_document(store, data.model_dump(exclude_unset=True))
    return created_response(document, "Document created successfully")


@router.put(
    "/{document_id}",
    response_model=Envelope[DocumentResponse],
    summary="Update a document request",
    description="Merge-patch: only supplied fields change. Any status may follow any other.",
    responses={
        400: {"description": "Invalid status"},
        404: {"description": "Document, user or document type not found"},
    },
)
def update_document(
    document_id: EntityIdPath,
    data: DocumentUpdate,
    store: Datastore = Depends(get_datastore),
) -> JSONResponse:
    document = service.update_document(store, document_id, data.model_dump(exclude_unset=True))
    return success_response(document, message="Document updated successfully")


@router.delete(
    "/{document_id}",
    response_model=Envelope[None],
    summary="Delete a document request",
    responses={404: {"description": "Document not found"}},
)
def delete_document(document_id: EntityIdPath, store: Datastore = Depends(get_datastore)) -> JSONResponse:
    service.delete_document(store, document_id)
    return success_response(message="Document deleted successfully")
