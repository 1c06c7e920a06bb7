from typing import Dict, Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import FileResponse

from app.api.deps import get_document_service, parse_id, require_member
from app.services.authorization import Accept, admin_gate
from app.services.document_service import DocumentNotFound, DocumentRejected, DocumentService

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("/send", summary="Upload an image or audio document")
def send_document(
    file: Optional[UploadFile] = File(None),
    claims: Dict = Depends(require_member),
    svc: DocumentService = Depends(get_document_service),
):
    try:
        _, file_info = svc.store_upload(
            file.file if file else None,
            file.filename if file else None,
            file.content_type if file else None,
            claims.get("userId"),
        )
    except DocumentRejected as e:
        raise HTTPException(status_code=400, detail=str(e))
    finally:
        if file is not None:
            file.file.close()
    return {"success": True, "message": "File uploaded successfully", "fileInfo": file_info}


@router.get("", summary="List the caller's documents")
def list_documents(
    claims: Dict = Depends(require_member),
    svc: DocumentService = Depends(get_document_service),
):
    return {"success": True, "documents": svc.list_for_user(claims.get("userId"))}


@router.get("/{document_id}", summary="Download a document")
def get_document(
    document_id: str,
    claims: Dict = Depends(require_member),
    svc: DocumentService = Depends(get_document_service),
):
    did = parse_id(document_id, "document ID")
    try:
        doc = svc.get_document(did)
    except DocumentNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    # only the uploader or an admin may read a document
    if doc.get("userId") != claims.get("userId") and not isinstance(admin_gate(claims), Accept):
        raise HTTPException(status_code=404, detail="Document not found")
    return FileResponse(
        doc["filePath"],
        media_type=doc.get("mimeType"),
        filename=doc.get("originalName"),
    )
