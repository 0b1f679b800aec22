from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from adminhub.core.registry.models import AdminModule


class RegistryConfig(BaseModel):
    """
    config/admin_registry.json schema.

    `dev_mode` grants every resolved user access to every registered module,
    unless `strict_permissions` forces normal role evaluation.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    dev_mode: bool = False
    strict_permissions: bool = True


class AdminFeatures(BaseModel):
    model_config = ConfigDict(extra="forbid")

    audit_log: bool = True
    bulk_operations: bool = True
    advanced_analytics: bool = True
    email_templates: bool = True
    backup: bool = True


class AdminConfig(BaseModel):
    """
    config/admin_modules.json schema: permission vocabulary, module catalog,
    role defaults and feature switches.
    """

    model_config = ConfigDict(extra="forbid")

    permissions: Dict[str, str] = Field(default_factory=dict)
    modules: List[AdminModule] = Field(default_factory=list)
    default_permissions: Dict[str, List[str]] = Field(default_factory=dict)
    features: AdminFeatures = Field(default_factory=AdminFeatures)
