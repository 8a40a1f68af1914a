"""Backup every stored ledger.

Note: Reads through the configured storage backend (json or mysql), so the
same script works for both. Output is one JSON object mapping user id to
its records, written under ``backups/``.
"""

from __future__ import annotations

import importlib
import json
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.self_attendance.self_attendance.attendance.repository import AttendanceStore, record_to_dict
from src.self_attendance.self_attendance.container import build_kv_store


def dump_all(store: AttendanceStore) -> dict[str, list[dict]]:
    return {user_id: [record_to_dict(r) for r in store.load(user_id)] for user_id in store.user_ids()}


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    kv = build_kv_store(
        backend=getattr(settings, "STORAGE_BACKEND", "json"),
        data_dir=getattr(settings, "DATA_DIR", "data"),
        db_config=dict(getattr(settings, "DB_CONFIG", {})),
    )

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"attendance_{ts}.json"

    data = dump_all(AttendanceStore(kv))
    out_file.write_text(json.dumps(data, indent=2), encoding="utf-8")
    print(f"OK: Backup created: {out_file} (users={len(data)})")


if __name__ == "__main__":
    main()
