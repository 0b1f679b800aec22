from __future__ import annotations

import json

import pytest

from adminhub.core.config.defaults import ADMIN_PERMISSIONS
from adminhub.core.config.loader import (
    default_admin_config,
    default_config_dict,
    load_admin_config,
    load_registry_config,
    validate_and_normalize,
)
from adminhub.core.config.models import RegistryConfig
from adminhub.core.errors import ConfigError
from adminhub.core.registry.registry import AdminModuleRegistry
from tests.helpers.builders import build_catalog_v1, build_module


def _all_nodes(cfg):
    return [m for root in cfg.modules for m in root.iter_tree()]


def test_default_configuration_is_valid():
    cfg = default_admin_config()
    assert len(cfg.modules) == 10
    assert cfg.features.audit_log is True
    assert set(cfg.default_permissions) == {"super_admin", "admin", "moderator"}


def test_default_modules_have_consistent_structure():
    for m in _all_nodes(default_admin_config()):
        assert isinstance(m.id, str) and m.id
        assert isinstance(m.name, str) and m.name
        assert isinstance(m.route, str) and m.route.startswith("/admin")
        assert m.icon
        assert m.component
        assert isinstance(m.permissions, list) and m.permissions
        assert m.enabled is True
        assert isinstance(m.order, int)


def test_default_ids_and_routes_unique_across_tree():
    nodes = _all_nodes(default_admin_config())
    assert len({m.id for m in nodes}) == len(nodes)
    assert len({m.route for m in nodes}) == len(nodes)


def test_role_defaults():
    perms = default_admin_config().default_permissions
    assert perms["super_admin"] == list(ADMIN_PERMISSIONS.keys())
    assert set(perms["moderator"]) < set(perms["super_admin"])
    assert "admin.xp.view" in perms["admin"]
    assert "admin.xp.view" not in perms["moderator"]


def test_camel_case_super_admin_key_is_normalized():
    raw = build_catalog_v1()
    raw["default_permissions"]["superAdmin"] = ["admin.alpha.view"]
    cfg = validate_and_normalize(raw)
    assert "superAdmin" not in cfg.default_permissions
    assert cfg.default_permissions["super_admin"] == ["admin.alpha.view"]
    assert "superAdmin" in raw["default_permissions"]


def test_super_admin_key_defined_twice_rejected():
    raw = build_catalog_v1()
    raw["default_permissions"]["super_admin"] = ["admin.alpha.view"]
    raw["default_permissions"]["superAdmin"] = ["admin.beta.view"]
    with pytest.raises(ConfigError):
        validate_and_normalize(raw)


def test_duplicate_ids_rejected():
    raw = build_catalog_v1(
        modules=[
            build_module("alpha", permissions=["admin.alpha.view"]),
            build_module("beta", permissions=["admin.beta.view"], sub_modules=[build_module("alpha", route="/admin/beta/alpha", permissions=["admin.alpha.view"])]),
        ]
    )
    with pytest.raises(ConfigError) as exc:
        validate_and_normalize(raw)
    assert "alpha" in exc.value.user_message


def test_duplicate_routes_rejected():
    raw = build_catalog_v1(
        modules=[
            build_module("alpha", permissions=["admin.alpha.view"], route="/admin/shared"),
            build_module("beta", permissions=["admin.beta.view"], route="/admin/shared"),
        ]
    )
    with pytest.raises(ConfigError) as exc:
        validate_and_normalize(raw)
    assert exc.value.context["duplicates"] == {"/admin/shared": ["alpha", "beta"]}


def test_unknown_permission_references_rejected():
    raw = build_catalog_v1()
    raw["modules"][0]["permissions"] = ["admin.gamma.view"]
    with pytest.raises(ConfigError):
        validate_and_normalize(raw)

    raw = build_catalog_v1()
    raw["default_permissions"]["moderator"] = ["admin.gamma.view"]
    with pytest.raises(ConfigError):
        validate_and_normalize(raw)


def test_invalid_module_shape_is_config_error():
    raw = build_catalog_v1()
    raw["modules"][0]["enabled"] = "sometimes"
    with pytest.raises(ConfigError):
        validate_and_normalize(raw)
    with pytest.raises(ConfigError):
        validate_and_normalize(["not", "an", "object"])


def test_default_config_dict_is_json_serializable():
    blob = json.dumps(default_config_dict())
    assert "xp-system" in blob


def test_load_admin_config_missing_file_uses_defaults(tmp_path):
    cfg = load_admin_config(str(tmp_path / "absent.json"))
    assert [m.id for m in cfg.modules] == [m.id for m in default_admin_config().modules]


def test_load_admin_config_from_file_drives_registry(tmp_path):
    path = tmp_path / "admin_modules.json"
    path.write_text(json.dumps(build_catalog_v1(), indent=2) + "\n", encoding="utf-8")
    reg = AdminModuleRegistry(RegistryConfig(), admin_config=load_admin_config(str(path)))
    reg.initialize()
    assert [m.id for m in reg.get_all_modules()] == ["alpha", "beta"]
    assert [m.id for m in reg.get_modules_for_user({"id": "m", "role": "moderator"})] == ["beta"]


def test_load_admin_config_corrupt_file_raises(tmp_path):
    path = tmp_path / "admin_modules.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_admin_config(str(path))


def test_load_registry_config(tmp_path):
    assert load_registry_config(str(tmp_path / "absent.json")) == RegistryConfig(dev_mode=False, strict_permissions=True)

    path = tmp_path / "admin_registry.json"
    path.write_text(json.dumps({"dev_mode": True, "strict_permissions": False}), encoding="utf-8")
    cfg = load_registry_config(str(path))
    assert cfg.dev_mode is True
    assert cfg.strict_permissions is False

    path.write_text(json.dumps({"dev_mode": True, "debug": True}), encoding="utf-8")
    with pytest.raises(ConfigError):
        load_registry_config(str(path))


def test_registry_config_is_frozen():
    cfg = RegistryConfig()
    with pytest.raises(Exception):
        cfg.dev_mode = True
