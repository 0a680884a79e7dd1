# pickpack_StatsReporter/utils/detect.py
from __future__ import annotations
from pathlib import Path
import mimetypes
import zipfile
from dataclasses import dataclass
from typing import Literal

DetectedKind = Literal["xlsx", "xls", "unknown"]

SPREADSHEET_MIME_TYPES = frozenset({
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-excel",
})
_OLE2_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"

# not every platform's mime table knows these
mimetypes.add_type("application/vnd.openxmlformats-officedocument.spreadsheetml.sheet", ".xlsx")
mimetypes.add_type("application/vnd.ms-excel", ".xls")


@dataclass(frozen=True)
class DetectedItem:
    path: Path        # actual path on disk
    kind: DetectedKind


def _is_xlsx_workbook(p: Path) -> bool:
    if not p.is_file():
        return False
    try:
        if not zipfile.is_zipfile(p):
            return False
        with zipfile.ZipFile(p, "r") as zf:
            return "xl/workbook.xml" in zf.namelist()
    except (OSError, zipfile.BadZipFile):
        return False


def _is_ole2(p: Path) -> bool:
    try:
        with p.open("rb") as f:
            return f.read(len(_OLE2_MAGIC)) == _OLE2_MAGIC
    except OSError:
        return False


def is_spreadsheet_mime(name: str) -> bool:
    mime, _ = mimetypes.guess_type(name)
    return mime in SPREADSHEET_MIME_TYPES


def detect_kind(p: Path) -> DetectedKind:
    """
    Classify a single path.
    - .xlsx (zip with xl/workbook.xml) -> 'xlsx'
    - .xls  (OLE2 compound document)   -> 'xls'
    else                               -> 'unknown'
    Office lock files ('~$name.xlsx') are always unknown.
    """
    if p.name.startswith("~$") or not is_spreadsheet_mime(p.name):
        return "unknown"
    suffix = p.suffix.lower()
    if suffix == ".xlsx" and _is_xlsx_workbook(p):
        return "xlsx"
    if suffix == ".xls" and _is_ole2(p):
        return "xls"
    return "unknown"


def discover_inputs(root: Path, recurse: bool = True) -> list[DetectedItem]:
    """
    If 'root' is a file -> return that one item (if known).
    If 'root' is a folder -> walk (optionally recursively) and collect workbooks.
    """
    items: list[DetectedItem] = []
    if root.is_file():
        kind = detect_kind(root)
        if kind != "unknown":
            items.append(DetectedItem(root.resolve(), kind))
        return items
    if not root.is_dir():
        return items

    it = root.rglob("*") if recurse else root.glob("*")
    for p in it:
        if not p.is_file():
            continue
        kind = detect_kind(p)
        if kind != "unknown":
            items.append(DetectedItem(p.resolve(), kind))

    # deterministic ordering
    items.sort(key=lambda x: str(x.path))
    return items
