from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from adminhub.core.config.defaults import ADMIN_PERMISSIONS, default_features, default_modules, default_role_permissions
from adminhub.core.config.io import read_json_file
from adminhub.core.config.models import AdminConfig, RegistryConfig
from adminhub.core.config.paths import ConfigFsPaths
from adminhub.core.errors import ConfigError


def default_config_dict() -> Dict[str, Any]:
    return {
        "permissions": dict(ADMIN_PERMISSIONS),
        "modules": default_modules(),
        "default_permissions": default_role_permissions(),
        "features": default_features(),
    }


ROLE_KEY_ALIASES = {"superAdmin": "super_admin"}


def _normalize_role_keys(raw: Dict[str, Any]) -> Dict[str, Any]:
    perms = raw.get("default_permissions")
    if not isinstance(perms, dict) or not any(k in perms for k in ROLE_KEY_ALIASES):
        return raw
    renamed: Dict[str, Any] = {}
    for role, values in perms.items():
        key = ROLE_KEY_ALIASES.get(role, role)
        if key in renamed:
            raise ConfigError(f"default_permissions defines role '{key}' twice.", role=key)
        renamed[key] = values
    return {**raw, "default_permissions": renamed}


def validate_and_normalize(raw: Dict[str, Any]) -> AdminConfig:
    if not isinstance(raw, dict):
        raise ConfigError("Admin catalog must be an object.")
    raw = _normalize_role_keys(raw)
    try:
        cfg = AdminConfig.model_validate(raw)
    except PydanticValidationError as e:
        raise ConfigError(str(e)) from e

    ids: Dict[str, int] = {}
    routes: Dict[str, List[str]] = {}
    for root in cfg.modules:
        for m in root.iter_tree():
            ids[m.id] = ids.get(m.id, 0) + 1
            routes.setdefault(m.route, []).append(m.id)
    dup_ids = sorted(k for k, n in ids.items() if n > 1)
    if dup_ids:
        raise ConfigError(f"Admin catalog has duplicate module ids: {', '.join(dup_ids)}.", duplicates=dup_ids)
    dup_routes = {r: owners for r, owners in routes.items() if len(owners) > 1}
    if dup_routes:
        raise ConfigError(f"Admin catalog has duplicate routes: {', '.join(sorted(dup_routes))}.", duplicates=dup_routes)

    # Permission references must come from the declared vocabulary
    known = set(cfg.permissions.keys())
    if known:
        for root in cfg.modules:
            for m in root.iter_tree():
                for perm in m.permissions:
                    if perm not in known:
                        raise ConfigError(f"Module '{m.id}' references unknown permission '{perm}'.")
        for role, perms in cfg.default_permissions.items():
            for perm in perms:
                if perm not in known:
                    raise ConfigError(f"default_permissions[{role}] references unknown permission '{perm}'.")

    return cfg


def default_admin_config() -> AdminConfig:
    return validate_and_normalize(default_config_dict())


def load_admin_config(path: Optional[str] = None) -> AdminConfig:
    """
    Load the admin catalog from JSON. A missing file falls back to the built-in
    defaults; a present but unreadable or invalid file is a ConfigError.
    """
    path = path or ConfigFsPaths(".").admin_catalog
    rr = read_json_file(path)
    if not rr.ok:
        if rr.error == "missing":
            return default_admin_config()
        raise ConfigError(f"Admin catalog unreadable: {rr.error}", path=path)
    return validate_and_normalize(rr.data)


def load_registry_config(path: Optional[str] = None) -> RegistryConfig:
    path = path or ConfigFsPaths(".").registry
    rr = read_json_file(path)
    if not rr.ok:
        if rr.error == "missing":
            return RegistryConfig()
        raise ConfigError(f"Registry config unreadable: {rr.error}", path=path)
    try:
        return RegistryConfig.model_validate(rr.data)
    except PydanticValidationError as e:
        raise ConfigError(str(e), path=path) from e
