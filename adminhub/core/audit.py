from __future__ import annotations

import json
import logging
import os
import threading
import time
from collections import deque
from typing import Any, Deque, Dict, List, Optional


REDACT_KEYS = {
    "password",
    "secret",
    "token",
    "api_key",
    "key",
    "authorization",
    "session",
}


def redact(obj: Any) -> Any:
    if isinstance(obj, dict):
        out: Dict[str, Any] = {}
        for k, v in obj.items():
            if str(k).lower() in REDACT_KEYS:
                out[k] = "***REDACTED***"
            else:
                out[k] = redact(v)
        return out
    if isinstance(obj, list):
        return [redact(x) for x in obj]
    return obj


class RegistryAuditLogger:
    """
    Appends registry mutations to a JSONL file and keeps a small in-memory tail
    for admin tooling.
    """

    def __init__(self, *, path: str = os.path.join("logs", "admin_audit.jsonl"), keep_last: int = 200):
        self.path = path
        self._lock = threading.Lock()
        self._recent: Deque[Dict[str, Any]] = deque(maxlen=max(10, int(keep_last)))

    def log(
        self,
        *,
        trace_id: str,
        event: str,
        outcome: str,
        actor: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        payload = {
            "ts": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            "trace_id": trace_id,
            "event": event,
            "outcome": outcome,
            "actor": actor,
            "details": redact(details or {}),
        }
        line = json.dumps(payload, ensure_ascii=False, default=str)
        with self._lock:
            parent = os.path.dirname(self.path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
            self._recent.appendleft(payload)

    def recent(self, n: int = 50) -> List[Dict[str, Any]]:
        with self._lock:
            return list(self._recent)[: max(1, int(n))]


def safe_audit(audit: Optional[RegistryAuditLogger], logger: Optional[logging.Logger], **entry: Any) -> None:
    """Audit writes never fail the caller; a broken sink is logged instead."""
    if audit is None:
        return
    try:
        audit.log(**entry)
    except OSError as e:
        if logger is not None:
            logger.warning(f"Audit write failed ({entry.get('event')}): {e}")
