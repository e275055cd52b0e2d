import logging
from pathlib import Path

import gripe_logger.config.config as configs

logger = logging.getLogger(__name__)


class BlobStorageError(Exception):
    pass


class BlobStorage:
    """Filesystem-backed object store addressed by relative keys like ``user/complaint/123.pdf``."""

    def __init__(self, root: str):
        self.root = Path(root).resolve()

    def _resolve(self, path: str) -> Path:
        target = (self.root / path).resolve()
        if target == self.root or self.root not in target.parents:
            raise BlobStorageError(f"invalid blob path: {path!r}")
        return target

    def exists(self, path: str) -> bool:
        return self._resolve(path).is_file()

    def upload(self, path: str, data: bytes) -> None:
        target = self._resolve(path)
        if target.exists():
            raise BlobStorageError(f"blob already exists: {path}")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            raise BlobStorageError(f"upload failed for {path}") from exc

    def download(self, path: str) -> bytes:
        target = self._resolve(path)
        try:
            return target.read_bytes()
        except OSError as exc:
            raise BlobStorageError(f"download failed for {path}") from exc

    def remove(self, paths: list[str]) -> None:
        # missing blobs count as removed
        for path in paths:
            target = self._resolve(path)
            try:
                target.unlink(missing_ok=True)
            except OSError as exc:
                raise BlobStorageError(f"remove failed for {path}") from exc
            logger.debug("removed blob %s", path)


blob_storage = BlobStorage(configs.STORAGE_DIR)
