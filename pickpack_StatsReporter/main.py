# pickpack_StatsReporter/main.py
from __future__ import annotations
from pathlib import Path
import asyncio
import logging
import sys
import yaml

from pickpack_StatsReporter.core.combine import combine
from pickpack_StatsReporter.core.pipeline import run_pipeline
from pickpack_StatsReporter.core.upload import UploadStatus, completed, new_upload, process_uploads
from pickpack_StatsReporter.utils.detect import discover_inputs


def load_config(cfg_path: Path) -> dict:
    with cfg_path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def main(argv: list[str] | None = None):
    argv = sys.argv[1:] if argv is None else argv

    # ---------- config ----------
    here = Path(__file__).resolve().parent
    cfg_path = Path(argv[0]).resolve() if argv else here / "config.yaml"
    cfg = load_config(cfg_path)

    log_cfg = cfg.get("logging", {}) or {}
    verbose = bool(log_cfg.get("verbose", True))
    logging.basicConfig(level=str(log_cfg.get("level", "INFO")).upper(),
                        format="%(levelname)s %(name)s: %(message)s")

    in_path = Path(cfg["input"]["path"]).resolve()
    recurse = bool(cfg["input"].get("recurse", True))
    out_root = Path(cfg["output"]["root"]).resolve()
    out_root.mkdir(parents=True, exist_ok=True)

    if verbose:
        print(f"[cfg] {cfg_path}")
        print(f"[cfg] input={in_path} (recurse={recurse})")
        print(f"[cfg] output={out_root}")

    # ---------- discover ----------
    detected = discover_inputs(in_path, recurse=recurse)
    if not detected:
        print(f"[INFO] No .xlsx/.xls workbooks found under: {in_path}")
        sys.exit(0)
    if verbose:
        kinds = {}
        for d in detected:
            kinds.setdefault(d.kind, 0)
            kinds[d.kind] += 1
        print(f"[detector] found {sum(kinds.values())} inputs → {kinds}")

    # ---------- load ----------
    uploads = [new_upload(d.path) for d in detected]

    def on_status(u):
        if u.status is UploadStatus.ERROR:
            print(f"[WARN] {u.name}: {u.error}")
        elif verbose and u.status is UploadStatus.COMPLETED:
            print(f"  [load] {u.name}: {len(u.records)} record(s)")

    uploads = asyncio.run(process_uploads(uploads, cfg, on_status=on_status))

    done = completed(uploads)
    records = combine(done)
    if not records:
        if verbose:
            print("[INFO] No records loaded; exiting without processing pipeline.")
        sys.exit(0)

    if verbose:
        print(f"[pipeline] processing {len(records)} record(s) from {len(done)} of {len(uploads)} file(s)")
    run_pipeline(records, cfg, out_root)


if __name__ == "__main__":
    main()
