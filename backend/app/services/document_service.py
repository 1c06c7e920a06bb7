import logging
import os
from datetime import datetime, timezone
from typing import BinaryIO, Dict, List, Optional, Tuple
from uuid import uuid4

from app.repositories.document_repo import DocumentRepository
from app.services.cart_pricing import generate_id

log = logging.getLogger(__name__)

ALLOWED_PREFIXES = ("image/", "audio/")
CHUNK_SIZE = 64 * 1024


class DocumentException(Exception):
    pass


class DocumentRejected(DocumentException):
    """Upload refused (type, size, missing file)."""


class DocumentNotFound(DocumentException):
    pass


def is_allowed_mime(mime_type: Optional[str]) -> bool:
    return bool(mime_type) and mime_type.lower().startswith(ALLOWED_PREFIXES)


class DocumentService:
    def __init__(self, repo: DocumentRepository, upload_dir: str, max_bytes: int):
        self.repo = repo
        self.upload_dir = upload_dir
        self.max_bytes = max_bytes

    def _size_message(self) -> str:
        return f"File size exceeds the {self.max_bytes // (1024 * 1024)}MB limit"

    def store_upload(
        self,
        fileobj: Optional[BinaryIO],
        original_name: Optional[str],
        mime_type: Optional[str],
        user_id,
    ) -> Tuple[Dict, Dict]:
        """
        Copy an uploaded stream to disk and record its metadata.

        Returns ``(record, file_info)`` where ``file_info`` describes the stored
        file the way upload clients expect it.
        """
        if fileobj is None or not original_name:
            raise DocumentRejected("No file uploaded")
        if not is_allowed_mime(mime_type):
            raise DocumentRejected("Only image and audio files are allowed")

        os.makedirs(self.upload_dir, exist_ok=True)
        _, ext = os.path.splitext(os.path.basename(original_name))
        file_name = f"{uuid4().hex}{ext.lower()}"
        file_path = os.path.join(self.upload_dir, file_name)

        size = 0
        with open(file_path, "wb") as out:
            while True:
                chunk = fileobj.read(CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if size > self.max_bytes:
                    break
                out.write(chunk)
        if size > self.max_bytes:
            os.remove(file_path)
            log.info("Upload rejected for size name=%s limit=%s", original_name, self.max_bytes)
            raise DocumentRejected(self._size_message())

        documents = self.repo.list()
        record = {
            "id": generate_id(documents),
            "originalName": original_name,
            "mimeType": mime_type,
            "size": size,
            "fileName": file_name,
            "filePath": file_path,
            "userId": user_id,
            "uploadDate": datetime.now(timezone.utc).isoformat(),
        }
        documents.append(record)
        self.repo.save_all(documents)
        log.info("Document stored id=%s user_id=%s size=%s", record["id"], user_id, size)

        file_info = {
            "originalname": original_name,
            "mimetype": mime_type,
            "size": size,
            "filename": file_name,
        }
        return record, file_info

    def list_for_user(self, user_id) -> List[Dict]:
        return [
            {
                "id": d["id"],
                "originalName": d.get("originalName"),
                "mimeType": d.get("mimeType"),
                "size": d.get("size"),
                "uploadDate": d.get("uploadDate"),
            }
            for d in self.repo.list_for_user(user_id)
        ]

    def get_document(self, document_id: int) -> Dict:
        doc = self.repo.get(document_id)
        if doc is None:
            raise DocumentNotFound("Document not found")
        if not os.path.exists(doc.get("filePath", "")):
            raise DocumentNotFound("File not found on disk")
        return doc
