from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from adminhub.core.audit import RegistryAuditLogger
from adminhub.core.config.io import atomic_write_json
from adminhub.core.config.loader import load_admin_config, load_registry_config
from adminhub.core.config.models import RegistryConfig
from adminhub.core.config.paths import ConfigFsPaths
from adminhub.core.errors import AdminHubError
from adminhub.core.logger import setup_logging
from adminhub.core.registry.cli import (
    catalog_snapshot,
    check_payload,
    modules_list_lines,
    navigation_json,
    navigation_lines,
)
from adminhub.core.registry.models import AdminUser
from adminhub.core.registry.registry import AdminModuleRegistry


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="adminhub", description="Inspect the admin module registry.")
    p.add_argument("--root", default=".", help="Directory holding config/ and logs/.")
    p.add_argument("--catalog", default=None, help="Admin catalog JSON (default: config/admin_modules.json).")
    p.add_argument("--config", default=None, help="Registry flags JSON (default: config/admin_registry.json).")
    p.add_argument("--dev-mode", action="store_true", help="Force dev_mode on.")
    p.add_argument("--strict", dest="strict", action="store_true", default=None, help="Force strict_permissions on.")
    p.add_argument("--no-strict", dest="strict", action="store_false", default=None, help="Force strict_permissions off.")
    sub = p.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List every registered module.")

    nav = sub.add_parser("nav", help="Show the navigation tree for a role.")
    nav.add_argument("--role", required=True)
    nav.add_argument("--user-id", default="cli")
    nav.add_argument("--json", action="store_true")

    chk = sub.add_parser("check", help="Explain access to one module for a role.")
    chk.add_argument("module_id")
    chk.add_argument("--role", required=True)
    chk.add_argument("--user-id", default="cli")

    exp = sub.add_parser("export", help="Write the current catalog snapshot as JSON.")
    exp.add_argument("path")
    return p


def build_registry(args: argparse.Namespace) -> AdminModuleRegistry:
    fs = ConfigFsPaths(args.root)
    flags = load_registry_config(args.config or fs.registry)
    # Command-line flags override the file; unset flags keep its values
    if args.dev_mode or args.strict is not None:
        flags = RegistryConfig(
            dev_mode=flags.dev_mode or args.dev_mode,
            strict_permissions=flags.strict_permissions if args.strict is None else args.strict,
        )
    logger = setup_logging(fs.logs_dir)
    registry = AdminModuleRegistry(
        flags,
        admin_config=load_admin_config(args.catalog or fs.admin_catalog),
        logger=logger.getChild("registry"),
        audit=RegistryAuditLogger(path=fs.audit_log),
    )
    registry.initialize(trace_id="cli")
    return registry


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        registry = build_registry(args)
    except AdminHubError as e:
        print(json.dumps(e.to_dict(), indent=2, default=str), file=sys.stderr)
        return 2

    if args.command == "list":
        print("\n".join(modules_list_lines(registry=registry)))
    elif args.command == "nav":
        user = AdminUser(id=args.user_id, role=args.role)
        if args.json:
            print(navigation_json(registry=registry, user=user))
        else:
            print("\n".join(navigation_lines(registry=registry, user=user)))
    elif args.command == "check":
        user = AdminUser(id=args.user_id, role=args.role)
        print(json.dumps(check_payload(registry=registry, module_id=args.module_id, user=user), indent=2))
    elif args.command == "export":
        atomic_write_json(args.path, catalog_snapshot(registry=registry), ConfigFsPaths(args.root).backups_dir)
        print(f"Wrote {args.path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
