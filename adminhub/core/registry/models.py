from __future__ import annotations

import math
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, field_validator
from pydantic import ValidationError as PydanticValidationError

from adminhub.core.errors import ValidationError

SUPER_ADMIN_ROLE = "super_admin"


class AdminModule(BaseModel):
    """
    One permission-gated admin feature. `icon` and `component` are UI references
    that the registry stores but never inspects.
    """

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True, revalidate_instances="always")

    id: str
    name: str
    icon: Any = None
    route: str
    component: Any
    permissions: List[str]
    enabled: StrictBool
    order: Union[StrictInt, StrictFloat]
    description: Optional[str] = None
    settings: Optional[Dict[str, Any]] = None
    sub_modules: Optional[List["AdminModule"]] = None

    @field_validator("id", "name", "route", mode="before")
    @classmethod
    def _non_empty_str(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("must be a non-empty string")
        return v

    @field_validator("permissions", mode="before")
    @classmethod
    def _permission_list(cls, v: Any) -> List[str]:
        if not isinstance(v, list):
            raise ValueError("must be a list of permission strings")
        for p in v:
            if not isinstance(p, str) or not p.strip():
                raise ValueError("permission entries must be non-empty strings")
        return v

    @field_validator("order", mode="before")
    @classmethod
    def _numeric_order(cls, v: Any) -> Any:
        if isinstance(v, bool) or not isinstance(v, (int, float)) or not math.isfinite(v):
            raise ValueError("order must be a finite number")
        return v

    @field_validator("component", mode="before")
    @classmethod
    def _component_present(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("component is required")
        return v

    @field_validator("sub_modules", mode="after")
    @classmethod
    def _empty_children_are_none(cls, v: Optional[List["AdminModule"]]) -> Optional[List["AdminModule"]]:
        return v or None

    def iter_tree(self):
        """Pre-order walk over this module and all of its descendants."""
        yield self
        for child in self.sub_modules or []:
            yield from child.iter_tree()


class AdminUser(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    role: str
    email: Optional[str] = None


class NavNode(BaseModel):
    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    id: str
    name: str
    route: str
    icon: Any = None
    description: Optional[str] = None
    order: Union[StrictInt, StrictFloat] = 0
    sub_modules: List["NavNode"] = Field(default_factory=list)


def user_role(user: Any) -> Optional[str]:
    """Role of a requesting user: an AdminUser, any object with `.role`, or a mapping."""
    if user is None:
        return None
    if isinstance(user, Mapping):
        role = user.get("role")
    else:
        role = getattr(user, "role", None)
    role = getattr(role, "value", role)
    if role is None:
        return None
    return str(role)


def validate_module(raw: Union[AdminModule, Mapping[str, Any]]) -> AdminModule:
    """
    Build a detached, validated AdminModule tree from a model or a mapping.

    The result shares no containers with `raw`, so a failed call leaves the
    caller's object and every registry untouched.
    """
    if isinstance(raw, AdminModule):
        raw = raw.model_dump()
    if not isinstance(raw, Mapping):
        raise ValidationError("Admin module must be an object.", got=type(raw).__name__)
    try:
        module = AdminModule.model_validate(dict(raw))
    except PydanticValidationError as e:
        raise ValidationError(
            f"Invalid admin module '{raw.get('id') or '?'}'.",
            module_id=raw.get("id"),
            errors=[f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()],
        ) from e

    seen: Dict[str, int] = {}
    for node in module.iter_tree():
        seen[node.id] = seen.get(node.id, 0) + 1
    dupes = sorted(k for k, n in seen.items() if n > 1)
    if dupes:
        raise ValidationError("Duplicate module ids inside one module tree.", module_id=module.id, duplicates=dupes)
    return module


AdminModule.model_rebuild()
NavNode.model_rebuild()
