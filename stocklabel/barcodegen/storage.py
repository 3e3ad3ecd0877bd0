"""
Artifact storage: directory preparation and the detached ("fire-and-forget") write.

Contract of DetachedWriter.submit:
    - at most once, no retry
    - failures are logged and resolve the returned future to False
    - nothing is re-raised to the caller, who already has its response
"""

from __future__ import annotations

import logging
import os
import sys
import tempfile
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from types import TracebackType
from typing import Final, Optional, Type, Union

from stocklabel.barcodegen.errors import ArtifactWriteError
from stocklabel.model.enums import RenderTarget

logger = logging.getLogger(__name__)

__all__ = [
    "BARCODES_DIRNAME",
    "default_data_dir",
    "BarcodeDirectory",
    "write_artifact",
    "DetachedWriter",
]

BARCODES_DIRNAME: Final[str] = "barcodes"


def default_data_dir(app_id: str) -> Path:
    """Per-user data directory for the application's barcodes."""
    if sys.platform == "win32":
        root = Path(os.environ.get("APPDATA") or Path.home() / "AppData" / "Roaming")
    elif sys.platform == "darwin":
        root = Path.home() / "Library" / "Application Support"
    else:
        root = Path(os.environ.get("XDG_DATA_HOME") or Path.home() / ".local" / "share")
    return root / app_id / BARCODES_DIRNAME


class BarcodeDirectory:
    """
    Builds <base>/<PRODUCT>/<VARIANT>/barcode.<ext> and guarantees the parent
    exists (idempotent create-if-absent).
    """

    def __init__(self, base_dir: Union[str, Path]) -> None:
        self.base_dir = Path(base_dir)

    def path_for(
        self, product_token: str, variant_token: Optional[str], target: RenderTarget
    ) -> Path:
        filename = target.filename
        if filename is None:
            raise ValueError(f"Render target {target.value!r} has no artifact file")
        if not product_token:
            raise ValueError("Product path token must not be empty")
        directory = self.base_dir / product_token
        if variant_token:
            directory = directory / variant_token
        return directory / filename

    def prepare(
        self, product_token: str, variant_token: Optional[str], target: RenderTarget
    ) -> Path:
        path = self.path_for(product_token, variant_token, target)
        if not path.parent.exists():
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ArtifactWriteError(
                    f"Failed to create barcode directories: {path.parent}", cause=e
                ) from e
            logger.debug("Created barcode directory: %s", path.parent)
        logger.debug("Barcode save path: %s", path)
        return path


def write_artifact(path: Union[str, Path], data: bytes) -> Path:
    """
    Write bytes next to the destination, flush, then rename into place.

    Readers never observe a half-written file.

    Raises:
        ArtifactWriteError: on any create/write/flush/rename failure.
    """
    path = Path(path)
    tmp_name: Optional[str] = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            try:
                os.unlink(tmp_name)
            except OSError as cleanup_error:
                logger.warning("Failed to remove temp file %s: %r", tmp_name, cleanup_error)
        raise ArtifactWriteError(f"Failed to write artifact {path}", cause=e) from e
    logger.info("Saved barcode artifact: %s (%d bytes)", path, len(data))
    return path


class DetachedWriter:
    """
    Background writer for rendered artifacts.

    Example:
        >>> with DetachedWriter() as writer:
        ...     future = writer.submit("/tmp/x/barcode.png", png_bytes)
        >>> future.result()
        True
    """

    def __init__(self, max_workers: int = 2) -> None:
        self._pool = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="barcode-writer"
        )

    @staticmethod
    def _write(path: Path, data: bytes) -> bool:
        try:
            write_artifact(path, data)
        except ArtifactWriteError as e:
            logger.error("Failed to save barcode artifact %s: %s", path, e)
            return False
        except Exception:
            # Future результат никто не читает: логируем здесь
            logger.exception("Unexpected error while saving barcode artifact %s", path)
            return False
        return True

    def submit(self, path: Union[str, Path], data: bytes) -> "Future[bool]":
        logger.debug("Scheduling detached write: %s", path)
        return self._pool.submit(self._write, Path(path), data)

    def shutdown(self, wait: bool = True) -> None:
        self._pool.shutdown(wait=wait)

    def __enter__(self) -> "DetachedWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.shutdown(wait=True)
