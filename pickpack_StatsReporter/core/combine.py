# pickpack_StatsReporter/core/combine.py
from __future__ import annotations
from typing import Iterable

from .model import Record


def combine(parsed_files: Iterable) -> list[Record]:
    """
    Flatten per-file record lists in input order.
    Items may be uploads (anything with a ``records`` attribute, None = nothing parsed)
    or plain record sequences.
    """
    out: list[Record] = []
    for item in parsed_files:
        records = getattr(item, "records", item)
        if records:
            out.extend(records)
    return out
