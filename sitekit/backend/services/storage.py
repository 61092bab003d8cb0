"""
Upload Storage.

Image uploads stored on local disk under the configured uploads directory
and served by the app at the configured URL prefix.

Stored names are `<prefix>-<unix_ms>-<random>.<ext>`; the value kept in
the database is the public URL path, e.g. `/uploads/products/product-...jpg`.

Files live outside the database transaction, so services tie them to the
request session: a new file is removed if the session rolls back, and a
replaced or deleted file is removed only once the session commits.
"""

from pathlib import Path

from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from sitekit.backend.core.config import find_project_root, get_app_config
from sitekit.backend.core.config_schema import UploadsSchema
from sitekit.backend.core.exceptions import PayloadTooLargeError, ValidationError
from sitekit.backend.core.logging import get_logger
from sitekit.backend.core.utils import random_hex, unix_ms

logger = get_logger(__name__)


def _write_file(path: Path, content: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)


def resolve_upload_root(config: UploadsSchema | None = None) -> Path:
    config = config or get_app_config().uploads
    root = Path(config.directory)
    if not root.is_absolute():
        root = find_project_root() / root
    return root


class UploadStorage:
    """Validates, writes and removes uploaded images."""

    def __init__(self, root: Path | None = None, config: UploadsSchema | None = None) -> None:
        self.config = config or get_app_config().uploads
        self.root = root or resolve_upload_root(self.config)
        self.url_prefix = self.config.url_prefix.rstrip("/")

    def _extension(self, filename: str | None) -> str:
        if not filename or "." not in filename:
            return ""
        return filename.rsplit(".", 1)[1].lower()

    def validate(self, upload: UploadFile) -> str:
        """
        Check the extension and content type of an upload.

        Returns:
            Normalised file extension

        Raises:
            ValidationError: If the file is not an allowed image type
        """
        extension = self._extension(upload.filename)
        content_type = upload.content_type or ""
        if extension not in self.config.allowed_extensions or not content_type.startswith("image/"):
            raise ValidationError("Only image files are allowed (jpeg, jpg, png, gif, webp)")
        return extension

    async def save(self, upload: UploadFile, subdir: str, prefix: str) -> str:
        """
        Store an uploaded image.

        Returns:
            Public URL path of the stored file

        Raises:
            ValidationError: If the file type is not allowed
            PayloadTooLargeError: If the file exceeds the size limit
        """
        extension = self.validate(upload)
        content = await upload.read(self.config.max_file_size_bytes + 1)
        if len(content) > self.config.max_file_size_bytes:
            raise PayloadTooLargeError(
                f"File too large (max {self.config.max_file_size_bytes // (1024 * 1024)}MB)"
            )

        filename = f"{prefix}-{unix_ms()}-{random_hex(4)}.{extension}"
        await run_in_threadpool(_write_file, self.root / subdir / filename, content)

        url = f"{self.url_prefix}/{subdir}/{filename}"
        logger.info("Upload stored", extra={"path": url, "size": len(content)})
        return url

    def path_for(self, url: str) -> Path | None:
        """Filesystem path for a stored URL, or None for foreign URLs."""
        if not url.startswith(self.url_prefix + "/"):
            return None
        relative = url[len(self.url_prefix) + 1:]
        candidate = (self.root / relative).resolve()
        if self.root.resolve() not in candidate.parents:
            return None
        return candidate

    def delete(self, url: str | None) -> bool:
        """
        Remove a stored file. A missing file is not an error.

        Returns:
            True if a file was removed
        """
        if not url:
            return False
        path = self.path_for(url)
        if path is None or not path.is_file():
            return False
        path.unlink()
        logger.info("Upload deleted", extra={"path": url})
        return True

    def delete_many(self, urls: list[str | None]) -> int:
        return sum(1 for url in urls if self.delete(url))

    def delete_after_commit(self, session: AsyncSession, urls: list[str | None]) -> None:
        """Remove files once `session` commits; a rollback keeps them."""
        pending = [url for url in urls if url]
        if not pending:
            return

        def remove(_: Session) -> None:
            self.delete_many(pending)

        event.listen(session.sync_session, "after_commit", remove, once=True)

    def delete_on_rollback(self, session: AsyncSession, url: str | None) -> None:
        """Remove a freshly stored file if `session` rolls back."""
        if not url:
            return

        def remove(_: Session, __: Session) -> None:
            self.delete(url)

        event.listen(session.sync_session, "after_soft_rollback", remove, once=True)


def get_upload_storage() -> UploadStorage:
    """Dependency returning storage rooted at the configured directory."""
    return UploadStorage()
