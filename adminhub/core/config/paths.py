from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class ConfigFsPaths:
    root: str = "."

    @property
    def config_dir(self) -> str:
        return os.path.join(self.root, "config")

    @property
    def backups_dir(self) -> str:
        return os.path.join(self.config_dir, "backups")

    @property
    def logs_dir(self) -> str:
        return os.path.join(self.root, "logs")

    # Files
    @property
    def admin_catalog(self) -> str:
        return os.path.join(self.config_dir, "admin_modules.json")

    @property
    def registry(self) -> str:
        return os.path.join(self.config_dir, "admin_registry.json")

    @property
    def audit_log(self) -> str:
        return os.path.join(self.logs_dir, "admin_audit.jsonl")
