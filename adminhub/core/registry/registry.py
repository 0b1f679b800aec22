from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from adminhub.core.audit import RegistryAuditLogger, safe_audit
from adminhub.core.config.loader import default_admin_config
from adminhub.core.config.models import AdminConfig, RegistryConfig
from adminhub.core.registry.models import AdminModule, NavNode, validate_module
from adminhub.core.registry.permissions import AccessDecision, PermissionEvaluator
from adminhub.core.registry.store import ModuleStore
from adminhub.core.trace import resolve_trace_id


class AdminModuleRegistry:
    """
    Mutable directory of admin modules, queried per requesting user.

    Mutations that name an unknown id return False. Only `register` raises
    (ValidationError), and it does so before touching the store. Access
    queries never raise: denial is False or an empty list.

    Not thread-safe: callers serialize mutating calls.
    """

    def __init__(
        self,
        config: Optional[RegistryConfig] = None,
        *,
        admin_config: Optional[AdminConfig] = None,
        logger: Optional[logging.Logger] = None,
        audit: Optional[RegistryAuditLogger] = None,
    ):
        self.config = config or RegistryConfig()
        self.admin_config = admin_config or default_admin_config()
        self.logger = logger or logging.getLogger("adminhub.registry")
        self.audit = audit if self.admin_config.features.audit_log else None
        self.evaluator = PermissionEvaluator(role_permissions=self.admin_config.default_permissions, flags=self.config)
        self._store = ModuleStore()
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def features(self) -> Dict[str, bool]:
        return self.admin_config.features.model_dump()

    def is_feature_enabled(self, name: str) -> bool:
        return bool(self.features.get(str(name), False))

    # ---- lifecycle ----
    def initialize(self, *, trace_id: Optional[str] = None) -> None:
        if self._initialized:
            self.logger.info("Admin module registry already initialized; skipping.")
            return
        for module in self.admin_config.modules:
            self._store.upsert(validate_module(module))
        self._initialized = True
        self.logger.info(f"Admin module registry initialized with {len(self._store)} modules.")
        self._audit("registry.initialized", "ok", trace_id=trace_id, details={"module_count": len(self._store)})

    def reset(self, *, trace_id: Optional[str] = None) -> None:
        self._store.clear()
        self._initialized = False
        self.logger.info("Admin module registry reset to default catalog.")
        self._audit("registry.reset", "ok", trace_id=trace_id)
        self.initialize(trace_id=trace_id)

    # ---- mutations ----
    def register(
        self,
        module: Union[AdminModule, Mapping[str, Any]],
        *,
        trace_id: Optional[str] = None,
        actor: Optional[str] = None,
    ) -> AdminModule:
        node = validate_module(module)
        self._warn_route_collisions(node)
        replaced = self._store.has(node.id)
        self._store.upsert(node)
        self.logger.debug(f"Registered admin module '{node.id}' (replaced={replaced}).")
        self._audit(
            "module.registered",
            "replaced" if replaced else "added",
            trace_id=trace_id,
            actor=actor,
            details={"module_id": node.id, "ids": [m.id for m in node.iter_tree()]},
        )
        return node

    def unregister(self, module_id: str, *, trace_id: Optional[str] = None, actor: Optional[str] = None) -> bool:
        node = self._store.get(module_id)
        removed_ids = [m.id for m in node.iter_tree()] if node is not None else []
        if not self._store.remove(module_id):
            return False
        self.logger.debug(f"Unregistered admin module '{module_id}' ({len(removed_ids)} node(s)).")
        self._audit("module.unregistered", "removed", trace_id=trace_id, actor=actor, details={"module_id": module_id, "ids": removed_ids})
        return True

    def set_module_enabled(self, module_id: str, enabled: bool, *, trace_id: Optional[str] = None, actor: Optional[str] = None) -> bool:
        node = self._store.get(module_id)
        if node is None:
            return False
        previous = node.enabled
        node.enabled = bool(enabled)
        self._audit(
            "module.enabled_changed",
            "enabled" if node.enabled else "disabled",
            trace_id=trace_id,
            actor=actor,
            details={"module_id": module_id, "enabled": node.enabled, "previous": previous},
        )
        return True

    def update_module_settings(
        self,
        module_id: str,
        settings: Mapping[str, Any],
        *,
        trace_id: Optional[str] = None,
        actor: Optional[str] = None,
    ) -> bool:
        node = self._store.get(module_id)
        if node is None:
            return False
        merged = dict(node.settings or {})
        merged.update(dict(settings or {}))
        node.settings = merged
        self._audit(
            "module.settings_updated",
            "ok",
            trace_id=trace_id,
            actor=actor,
            details={"module_id": module_id, "keys": sorted(str(k) for k in (settings or {}))},
        )
        return True

    # ---- lookups ----
    def has_module(self, module_id: str) -> bool:
        return self._store.has(module_id)

    def get_module(self, module_id: str) -> Optional[AdminModule]:
        return self._store.get(module_id)

    def get_parent(self, module_id: str) -> Optional[AdminModule]:
        parent_id = self._store.parent_of(module_id)
        return self._store.get(parent_id) if parent_id is not None else None

    def get_all_modules(self) -> List[AdminModule]:
        return self._store.all_flat()

    def get_module_by_route(self, route: str) -> Optional[AdminModule]:
        for m in self._store.all_flat():
            if m.route == route:
                return m
        return None

    def find_route_conflicts(self) -> Dict[str, List[str]]:
        owners: Dict[str, List[str]] = {}
        for m in self._store.all_flat():
            owners.setdefault(m.route, []).append(m.id)
        return {route: ids for route, ids in owners.items() if len(ids) > 1}

    def get_enabled(self) -> List[AdminModule]:
        return _sorted_enabled(self._store.all_roots())

    def get_permission_index(self) -> Dict[str, List[str]]:
        """Permission string -> ids of the modules that list it."""
        index: Dict[str, List[str]] = {}
        for m in self._store.all_flat():
            for perm in m.permissions:
                index.setdefault(perm, []).append(m.id)
        return index

    # ---- access ----
    def explain_permission(self, module_id: str, user: Any) -> AccessDecision:
        return self.evaluator.evaluate(self._store.get(module_id), user)

    def has_permission(self, module_id: str, user: Any) -> bool:
        return self.evaluator.has_permission(self._store.get(module_id), user)

    def get_modules_for_user(self, user: Any) -> List[AdminModule]:
        return [m for m in self.get_enabled() if self.has_permission(m.id, user)]

    def get_navigation_structure(self, user: Any) -> List[NavNode]:
        return self._nav_level(self._store.all_roots(), user)

    def get_sidebar_links(self, user: Any) -> List[Dict[str, Any]]:
        links: List[Dict[str, Any]] = []
        for node in self.get_navigation_structure(user):
            if node.sub_modules:
                links.append({"label": node.name, "children": [{"label": c.name, "href": c.route} for c in node.sub_modules]})
            else:
                links.append({"label": node.name, "href": node.route})
        return links

    # ---- internals ----
    def _nav_level(self, modules: List[AdminModule], user: Any) -> List[NavNode]:
        out: List[NavNode] = []
        for m in _sorted_enabled(modules):
            if not self.has_permission(m.id, user):
                continue
            out.append(
                NavNode(
                    id=m.id,
                    name=m.name,
                    route=m.route,
                    icon=m.icon,
                    description=m.description,
                    order=m.order,
                    sub_modules=self._nav_level(list(m.sub_modules or []), user),
                )
            )
        return out

    def _warn_route_collisions(self, node: AdminModule) -> None:
        incoming = {m.id for m in node.iter_tree()}
        if self._store.has(node.id):
            incoming.update(m.id for m in self._store.get(node.id).iter_tree())
        for m in node.iter_tree():
            other = self.get_module_by_route(m.route)
            if other is not None and other.id not in incoming:
                self.logger.warning(f"Admin module '{m.id}' shares route '{m.route}' with '{other.id}'.")

    def _audit(
        self,
        event: str,
        outcome: str,
        *,
        trace_id: Optional[str] = None,
        actor: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        safe_audit(
            self.audit,
            self.logger,
            trace_id=resolve_trace_id(trace_id),
            event=event,
            outcome=outcome,
            actor=actor,
            details=details,
        )


def _sorted_enabled(modules: List[AdminModule]) -> List[AdminModule]:
    # sorted() is stable: equal orders keep registration order
    return sorted((m for m in modules if m.enabled), key=lambda m: m.order)
