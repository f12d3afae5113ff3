from __future__ import annotations

import argparse
import json
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from .models import RuleStatus, Severity
from .registry import RuleCatalog, registry

# Ensure built-in rules are imported/registered when generating a catalog.
from . import rules as _builtin_rules  # noqa: F401

PATH_SEPARATOR = "→"


class CheckSummary(BaseModel):
    code: str
    severity: Severity
    status: RuleStatus


class RuleCatalogEntry(BaseModel):
    action_key: str
    label: str
    demand_rank: int
    demand_total: int
    menu_path: str = ""
    ussd_path: str = ""
    description: str = ""

    module: str
    class_name: str

    has_pass_gate: bool = False
    checks: List[CheckSummary] = Field(default_factory=list)


class MenuItem(BaseModel):
    action_key: str
    label: str
    ussd_code: str
    demand_rank: int


class MenuSection(BaseModel):
    label: str
    ussd_code: str
    items: List[MenuItem] = Field(default_factory=list)


def _split_path(path: str) -> List[str]:
    return [part.strip() for part in path.split(PATH_SEPARATOR) if part.strip()]


def _code_key(code: str) -> Tuple[int, str]:
    return (int(code), code) if code.isdigit() else (10**6, code)


def build_catalog(catalog: Optional[RuleCatalog] = None) -> List[RuleCatalogEntry]:
    catalog = catalog if catalog is not None else registry.create_catalog()
    entries: List[RuleCatalogEntry] = []
    for rule in catalog:
        rule_cls = type(rule)
        entries.append(
            RuleCatalogEntry(
                **rule.definition().model_dump(),
                module=getattr(rule_cls, "__module__", ""),
                class_name=getattr(rule_cls, "__name__", ""),
                has_pass_gate=rule.gate is not None,
                checks=[
                    CheckSummary(code=check.code, severity=check.severity, status=check.status)
                    for check in rule.checks
                ],
            )
        )
    return entries


def build_menu(catalog: Optional[RuleCatalog] = None) -> List[MenuSection]:
    """Group actions into the self-service menu implied by their navigation paths.

    ``menu_path`` reads ``Section → Item`` and ``ussd_path`` reads
    ``*234# → <section code> → <item code>``.
    """
    catalog = catalog if catalog is not None else registry.create_catalog()
    sections: Dict[str, MenuSection] = {}
    for rule in catalog:
        menu_parts = _split_path(rule.menu_path)
        ussd_parts = _split_path(rule.ussd_path)
        if len(menu_parts) < 2 or len(ussd_parts) < 3:
            raise ValueError(f"Rule {rule.action_key} has an incomplete navigation path")

        section_label, section_code, item_code = menu_parts[0], ussd_parts[1], ussd_parts[2]
        section = sections.get(section_code)
        if section is None:
            section = sections[section_code] = MenuSection(label=section_label, ussd_code=section_code)
        elif section.label != section_label:
            raise ValueError(
                f"USSD section {section_code} is labelled both {section.label!r} and {section_label!r}"
            )
        section.items.append(
            MenuItem(
                action_key=rule.action_key,
                label=menu_parts[-1],
                ussd_code=item_code,
                demand_rank=rule.demand_rank,
            )
        )

    ordered = sorted(sections.values(), key=lambda s: _code_key(s.ussd_code))
    for section in ordered:
        section.items.sort(key=lambda i: _code_key(i.ussd_code))
    return ordered


def _dump_json(catalog: list[dict[str, Any]]) -> str:
    return json.dumps(catalog, indent=2, ensure_ascii=False)


def _dump_yaml(catalog: list[dict[str, Any]]) -> str:
    try:
        import yaml  # type: ignore
    except ModuleNotFoundError as exc:
        raise SystemExit("PyYAML is required for YAML output. Install it with `pip install pyyaml`.") from exc

    return yaml.safe_dump(catalog, sort_keys=False, allow_unicode=True)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Print the self-service action catalog.")
    parser.add_argument(
        "--format",
        choices=("yaml", "json"),
        default="yaml",
        help="Output format (default: yaml).",
    )
    parser.add_argument(
        "--menu",
        action="store_true",
        help="Print the menu tree grouped by USSD section instead of the flat catalog.",
    )
    args = parser.parse_args(argv)

    items = build_menu() if args.menu else build_catalog()
    payload = [item.model_dump(mode="json") for item in items]
    if args.format == "json":
        print(_dump_json(payload))
    else:
        print(_dump_yaml(payload))


if __name__ == "__main__":
    main()
