"""
CLI rendering helpers for the admin registry.

Kept separate from app.py so the output shapes can be tested without argv
parsing or a terminal.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List

from adminhub.core.registry.models import NavNode
from adminhub.core.registry.registry import AdminModuleRegistry


def modules_list_lines(*, registry: AdminModuleRegistry) -> List[str]:
    """
    Columns: module_id | parent | enabled | order | route
    """
    lines = ["module_id | parent | enabled | order | route"]
    for m in registry.get_all_modules():
        parent = registry.get_parent(m.id)
        lines.append(f"{m.id} | {parent.id if parent else '-'} | {str(m.enabled).lower()} | {m.order} | {m.route}")
    return lines


def navigation_lines(*, registry: AdminModuleRegistry, user: Any) -> List[str]:
    lines: List[str] = []

    def walk(nodes: List[NavNode], depth: int) -> None:
        for n in nodes:
            lines.append(f"{'  ' * depth}- {n.name} ({n.route})")
            walk(n.sub_modules, depth + 1)

    walk(registry.get_navigation_structure(user), 0)
    return lines


def navigation_json(*, registry: AdminModuleRegistry, user: Any) -> str:
    payload = [n.model_dump() for n in registry.get_navigation_structure(user)]
    return json.dumps(payload, indent=2, ensure_ascii=False, default=str)


def check_payload(*, registry: AdminModuleRegistry, module_id: str, user: Any) -> Dict[str, Any]:
    decision = registry.explain_permission(module_id, user)
    return {
        "module_id": module_id,
        "allowed": decision.allowed,
        "reason": decision.reason.value,
        "matched_permissions": list(decision.matched_permissions),
    }


def catalog_snapshot(*, registry: AdminModuleRegistry) -> Dict[str, Any]:
    """Current tree in the admin_modules.json shape (runtime state included)."""
    cfg = registry.admin_config
    return {
        "permissions": dict(cfg.permissions),
        "modules": [m.model_dump(exclude_none=True) for m in registry.get_all_modules() if registry.get_parent(m.id) is None],
        "default_permissions": {k: list(v) for k, v in cfg.default_permissions.items()},
        "features": cfg.features.model_dump(),
    }
