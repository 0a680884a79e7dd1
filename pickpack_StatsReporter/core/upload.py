# pickpack_StatsReporter/core/upload.py
from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable
import asyncio
import logging
import uuid

from ..loaders.excel_loader import read_grid
from .model import ParseError, Record
from .parse import ParseCfg, parse_grid, prepare_parsing

_LOG = logging.getLogger(__name__)


class UploadStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass(frozen=True)
class FileUpload:
    id: str
    name: str
    path: Path
    size: int
    status: UploadStatus = UploadStatus.PENDING
    records: tuple[Record, ...] | None = None
    error: str | None = None
    declared_kind: str | None = None


def new_upload(path: Path, declared_kind: str | None = None) -> FileUpload:
    path = Path(path)
    try:
        size = path.stat().st_size
    except OSError:
        size = 0
    return FileUpload(
        id=f"{path.name}-{uuid.uuid4().hex[:8]}",
        name=path.name,
        path=path,
        size=size,
        declared_kind=declared_kind,
    )


StatusCallback = Callable[[FileUpload], None]


def _emit(upload: FileUpload, on_status: StatusCallback | None) -> FileUpload:
    if on_status is not None:
        on_status(upload)
    return upload


async def process_upload(upload: FileUpload, cfg: dict | None = None,
                         on_status: StatusCallback | None = None,
                         parse_cfg: ParseCfg | None = None) -> FileUpload:
    """
    pending -> processing -> completed | error.
    Decoding runs off the event loop; a ParseError only fails this upload.
    """
    pcfg = parse_cfg or prepare_parsing(cfg)
    current = _emit(replace(upload, status=UploadStatus.PROCESSING, error=None), on_status)
    try:
        grid = await asyncio.to_thread(read_grid, current.path)
    except ParseError as e:
        _LOG.warning("upload %s failed: %s", current.name, e)
        return _emit(replace(current, status=UploadStatus.ERROR, error=str(e)), on_status)

    records = parse_grid(grid, current.name, kind=current.declared_kind, cfg=pcfg)
    return _emit(replace(current, status=UploadStatus.COMPLETED, records=tuple(records)), on_status)


async def process_uploads(uploads: Iterable[FileUpload], cfg: dict | None = None,
                          on_status: StatusCallback | None = None) -> list[FileUpload]:
    """Process every upload concurrently; result order follows input order."""
    pcfg = prepare_parsing(cfg)
    return list(await asyncio.gather(*(
        process_upload(u, cfg, on_status, parse_cfg=pcfg) for u in uploads
    )))


def completed(uploads: Iterable[FileUpload]) -> list[FileUpload]:
    return [u for u in uploads if u.status is UploadStatus.COMPLETED and u.records is not None]
