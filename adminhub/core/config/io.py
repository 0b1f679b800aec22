from __future__ import annotations

import json
import os
import shutil
import tempfile
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ReadResult:
    ok: bool
    data: Dict[str, Any]
    error: Optional[str] = None


def _ts() -> str:
    return time.strftime("%Y%m%d_%H%M%S", time.gmtime())


def ensure_dirs(*dirs: str) -> None:
    for d in dirs:
        if d:
            os.makedirs(d, exist_ok=True)


def read_json_file(path: str) -> ReadResult:
    if not os.path.exists(path):
        return ReadResult(ok=False, data={}, error="missing")
    try:
        with open(path, "r", encoding="utf-8") as f:
            obj = json.load(f)
        if not isinstance(obj, dict):
            return ReadResult(ok=False, data={}, error="not_object")
        return ReadResult(ok=True, data=obj)
    except json.JSONDecodeError as e:
        return ReadResult(ok=False, data={}, error=f"corrupt_json:{e}")
    except OSError as e:
        return ReadResult(ok=False, data={}, error=str(e))


def backup_file(path: str, backups_dir: str, *, max_backups: int = 10) -> Optional[str]:
    if not os.path.exists(path):
        return None
    ensure_dirs(backups_dir)
    base = os.path.basename(path)
    out = os.path.join(backups_dir, f"{base}.{_ts()}.prewrite.json")
    shutil.copy2(path, out)
    prefix = f"{base}."
    items = [os.path.join(backups_dir, f) for f in os.listdir(backups_dir) if f.startswith(prefix)]
    items.sort(key=lambda p: os.path.getmtime(p), reverse=True)
    for p in items[max_backups:]:
        try:
            os.remove(p)
        except OSError:
            pass
    return out


def atomic_write_json(path: str, data: Dict[str, Any], backups_dir: Optional[str] = None, *, max_backups: int = 10) -> None:
    ensure_dirs(os.path.dirname(path) or ".")
    if backups_dir:
        backup_file(path, backups_dir, max_backups=max_backups)
    fd, tmp = tempfile.mkstemp(prefix=".tmp_", suffix=".json", dir=os.path.dirname(path) or ".")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False, sort_keys=True, default=str)
            f.write("\n")
        os.replace(tmp, path)
    finally:
        try:
            if os.path.exists(tmp):
                os.remove(tmp)
        except OSError:
            pass
