from __future__ import annotations

from typing import Any, Dict, List, Optional

ADMIN_PERMISSIONS: Dict[str, str] = {
    # User management
    "admin.users.view": "View users",
    "admin.users.manage": "Manage users",
    "admin.users.delete": "Delete users",
    "admin.users.bulk": "Bulk user operations",
    # XP system
    "admin.xp.view": "View XP configuration",
    "admin.xp.manage": "Manage XP levels and rewards",
    "admin.xp.grant": "Grant XP to users",
    # Shop
    "admin.shop.view": "View shop products",
    "admin.shop.manage": "Manage shop products",
    "admin.shop.categories": "Manage shop categories",
    "admin.shop.inventory": "Manage inventory",
    # Wallet & economy
    "admin.wallet.view": "View wallet information",
    "admin.wallet.manage": "Manage DGT balances",
    "admin.wallet.transactions": "View transactions",
    "admin.wallet.grant": "Grant DGT tokens",
    # Forum
    "admin.forum.view": "View forum structure",
    "admin.forum.manage": "Manage forums and categories",
    "admin.forum.moderate": "Moderate content",
    # Reports & analytics
    "admin.reports.view": "View reports",
    "admin.reports.manage": "Manage reports",
    "admin.analytics.view": "View analytics",
    "admin.analytics.export": "Export analytics data",
    # System
    "admin.system.view": "View system settings",
    "admin.system.manage": "Manage system settings",
    "admin.system.backup": "Manage backups",
    "admin.system.audit": "View audit logs",
}


def _module(
    id: str,
    name: str,
    icon: str,
    route: str,
    component: str,
    permissions: List[str],
    order: int,
    *,
    description: Optional[str] = None,
    settings: Optional[Dict[str, Any]] = None,
    sub_modules: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "id": id,
        "name": name,
        "icon": icon,
        "route": route,
        "component": component,
        "permissions": list(permissions),
        "enabled": True,
        "order": order,
    }
    if description is not None:
        out["description"] = description
    if settings is not None:
        out["settings"] = dict(settings)
    if sub_modules:
        out["sub_modules"] = list(sub_modules)
    return out


def default_modules() -> List[Dict[str, Any]]:
    """
    Default admin catalog. Components are import paths resolved by the UI layer.
    """
    return [
        _module(
            "dashboard", "Dashboard", "LayoutDashboard", "/admin", "pages.admin.index",
            ["admin.system.view"], 0,
            description="Admin overview and statistics",
        ),
        _module(
            "users", "User Management", "Users", "/admin/users", "pages.admin.users",
            ["admin.users.view"], 1,
            description="Manage users, roles, and permissions",
            settings={"enableBulkOperations": True, "maxBulkSelection": 100},
            sub_modules=[
                _module("roles", "Roles", "Shield", "/admin/roles", "pages.admin.roles", ["admin.users.manage"], 0),
                _module(
                    "permissions", "Permissions", "Key", "/admin/permissions", "pages.admin.permissions",
                    ["admin.users.manage"], 1,
                ),
            ],
        ),
        _module(
            "xp-system", "XP System", "TrendingUp", "/admin/xp-system", "pages.admin.xp_system",
            ["admin.xp.view"], 2,
            description="Configure experience points and levels",
            settings={"maxLevel": 100, "xpMultiplier": 1.0, "enableSeasonalEvents": True},
        ),
        _module(
            "wallets", "Wallet Management", "Wallet", "/admin/wallets", "pages.admin.wallets",
            ["admin.wallet.view"], 3,
            description="Manage DGT tokens and transactions",
            sub_modules=[
                _module("treasury", "Treasury", "Landmark", "/admin/treasury", "pages.admin.treasury", ["admin.wallet.manage"], 0),
                _module(
                    "dgt-packages", "DGT Packages", "Package", "/admin/dgt-packages", "pages.admin.dgt_packages",
                    ["admin.wallet.manage"], 1,
                ),
            ],
        ),
        _module(
            "shop", "Shop Management", "ShoppingBag", "/admin/shop", "pages.admin.shop",
            ["admin.shop.view"], 4,
            description="Manage products and inventory",
            settings={"enableInventoryTracking": True, "lowStockThreshold": 10},
            sub_modules=[
                _module(
                    "shop-categories", "Categories", "FolderTree", "/admin/shop/categories", "pages.admin.shop.categories",
                    ["admin.shop.categories"], 0,
                ),
            ],
        ),
        _module(
            "forum", "Forum Structure", "MessageSquare", "/admin/forum-structure", "pages.admin.forum_structure",
            ["admin.forum.view"], 5,
            description="Manage forums and categories",
        ),
        _module(
            "reports", "Reports", "Flag", "/admin/reports", "pages.admin.reports",
            ["admin.reports.view"], 6,
            description="User reports and moderation",
        ),
        _module(
            "analytics", "Analytics", "BarChart3", "/admin/stats", "pages.admin.stats",
            ["admin.analytics.view"], 7,
            description="Platform analytics and insights",
            sub_modules=[
                _module(
                    "system-analytics", "System Analytics", "Activity", "/admin/system-analytics",
                    "pages.admin.system_analytics", ["admin.analytics.view"], 0,
                ),
            ],
        ),
        _module(
            "cosmetics", "Cosmetics", "Sparkles", "/admin/avatar-frames", "pages.admin.avatar_frames",
            ["admin.shop.manage"], 8,
            description="Manage avatar frames, stickers, and animations",
            sub_modules=[
                _module("stickers", "Stickers", "Sticker", "/admin/stickers", "pages.admin.stickers", ["admin.shop.manage"], 0),
                _module(
                    "animations", "Animations", "Zap", "/admin/ui/animations", "pages.admin.ui.animations",
                    ["admin.shop.manage"], 1,
                ),
                _module("emojis", "Emojis", "Smile", "/admin/emojis", "pages.admin.emojis", ["admin.shop.manage"], 2),
            ],
        ),
        _module(
            "settings", "Settings", "Settings", "/admin/settings", "pages.admin.social_config",
            ["admin.system.view"], 9,
            description="Platform configuration",
            sub_modules=[
                _module(
                    "feature-flags", "Feature Flags", "ToggleLeft", "/admin/feature-flags", "pages.admin.feature_flags",
                    ["admin.system.manage"], 0,
                ),
                _module(
                    "announcements", "Announcements", "Megaphone", "/admin/announcements", "pages.admin.announcements",
                    ["admin.system.manage"], 1,
                ),
            ],
        ),
    ]


def default_role_permissions() -> Dict[str, List[str]]:
    return {
        "super_admin": list(ADMIN_PERMISSIONS.keys()),
        "admin": [
            "admin.users.view",
            "admin.users.manage",
            "admin.xp.view",
            "admin.xp.manage",
            "admin.shop.view",
            "admin.shop.manage",
            "admin.wallet.view",
            "admin.forum.view",
            "admin.forum.manage",
            "admin.reports.view",
            "admin.reports.manage",
            "admin.analytics.view",
            "admin.system.view",
        ],
        "moderator": [
            "admin.users.view",
            "admin.forum.view",
            "admin.forum.moderate",
            "admin.reports.view",
            "admin.reports.manage",
        ],
    }


def default_features() -> Dict[str, bool]:
    return {
        "audit_log": True,
        "bulk_operations": True,
        "advanced_analytics": True,
        "email_templates": True,
        "backup": True,
    }
