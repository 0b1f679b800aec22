from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional

from adminhub.core.config.models import RegistryConfig
from adminhub.core.registry.models import SUPER_ADMIN_ROLE, AdminModule, user_role


class AccessReason(str, Enum):
    unknown_module = "unknown_module"
    anonymous = "anonymous"
    super_admin = "super_admin"
    dev_mode_bypass = "dev_mode_bypass"
    permission_match = "permission_match"
    no_matching_permission = "no_matching_permission"


@dataclass(frozen=True)
class AccessDecision:
    allowed: bool
    reason: AccessReason
    matched_permissions: tuple = ()

    def __bool__(self) -> bool:
        return self.allowed


class PermissionEvaluator:
    """
    Deterministic module access evaluation.

    Guard order:
      1. unknown module -> deny (dev mode never reveals unregistered ids)
      2. anonymous user -> deny
      3. super_admin -> allow
      4. dev_mode and not strict_permissions -> allow
      5. allow iff the role's permission set intersects the module's permissions
    """

    def __init__(self, *, role_permissions: Mapping[str, Iterable[str]], flags: RegistryConfig):
        self.role_permissions: Dict[str, List[str]] = {str(k): list(v or []) for k, v in (role_permissions or {}).items()}
        self.flags = flags

    def permissions_for_role(self, role: Optional[str]) -> List[str]:
        if not role:
            return []
        return list(self.role_permissions.get(role) or [])

    def evaluate(self, module: Optional[AdminModule], user: Any) -> AccessDecision:
        if module is None:
            return AccessDecision(False, AccessReason.unknown_module)
        if user is None:
            return AccessDecision(False, AccessReason.anonymous)

        role = user_role(user)
        if role == SUPER_ADMIN_ROLE:
            return AccessDecision(True, AccessReason.super_admin)

        if self.flags.dev_mode and not self.flags.strict_permissions:
            return AccessDecision(True, AccessReason.dev_mode_bypass)

        granted = set(self.permissions_for_role(role))
        matched = tuple(p for p in module.permissions if p in granted)
        if matched:
            return AccessDecision(True, AccessReason.permission_match, matched)
        return AccessDecision(False, AccessReason.no_matching_permission)

    def has_permission(self, module: Optional[AdminModule], user: Any) -> bool:
        return self.evaluate(module, user).allowed
