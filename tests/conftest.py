from __future__ import annotations

import pytest

from adminhub.core.config.models import RegistryConfig
from adminhub.core.registry.models import AdminUser
from adminhub.core.registry.registry import AdminModuleRegistry


@pytest.fixture
def users():
    return {
        "admin": AdminUser(id="1", role="admin", email="admin@test.com"),
        "moderator": AdminUser(id="2", role="moderator", email="mod@test.com"),
        "user": AdminUser(id="3", role="user", email="user@test.com"),
        "super_admin": AdminUser(id="4", role="super_admin", email="super@test.com"),
    }


@pytest.fixture
def registry():
    """
    Strict registry loaded with the default catalog.
    """
    reg = AdminModuleRegistry(RegistryConfig(dev_mode=False, strict_permissions=True))
    reg.initialize()
    return reg


@pytest.fixture
def dev_registry():
    reg = AdminModuleRegistry(RegistryConfig(dev_mode=True, strict_permissions=False))
    reg.initialize()
    return reg
