from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Tuple, Type

from ..errors import UnknownActionError
from .models import RuleDefinition
from .rule import Rule


class RuleCatalog:
    """Immutable, demand-ranked set of rule instances keyed by action key."""

    def __init__(self, rules: Iterable[Rule]):
        ordered = sorted(rules, key=lambda r: r.demand_rank)
        by_key: Dict[str, Rule] = {}
        for rule in ordered:
            if rule.action_key in by_key:
                raise ValueError(f"Duplicate action key in catalog: {rule.action_key}")
            by_key[rule.action_key] = rule

        ranks = [rule.demand_rank for rule in ordered]
        if ranks != list(range(1, len(ordered) + 1)):
            raise ValueError(f"Demand ranks must run 1..{len(ordered)} without gaps, got {ranks}")

        self._rules: Tuple[Rule, ...] = tuple(ordered)
        self._by_key = by_key

    def __getitem__(self, action_key: str) -> Rule:
        try:
            return self._by_key[action_key]
        except KeyError:
            raise UnknownActionError(action_key) from None

    def __contains__(self, action_key: object) -> bool:
        return action_key in self._by_key

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def definitions(self) -> List[RuleDefinition]:
        return [rule.definition() for rule in self._rules]

    def definition(self, action_key: str) -> RuleDefinition:
        return self[action_key].definition()

    @property
    def max_demand_total(self) -> int:
        return max((rule.demand_total for rule in self._rules), default=0)


class RuleRegistry:
    def __init__(self):
        self._rules: Dict[str, Type[Rule]] = {}

    def register(self, rule_cls: Type[Rule]) -> None:
        action_key = getattr(rule_cls, "action_key", None)
        if not action_key:
            raise ValueError("Rule class missing action_key")
        if action_key in self._rules:
            raise ValueError(f"Duplicate action_key registered: {action_key}")
        for attr in ("label", "demand_rank", "demand_total"):
            if getattr(rule_cls, attr, None) is None:
                raise ValueError(f"Rule {action_key} missing {attr}")
        self._rules[action_key] = rule_cls

    def create_all(self) -> list[Rule]:
        return [cls() for cls in self._rules.values()]

    def create_catalog(self) -> RuleCatalog:
        return RuleCatalog(self.create_all())


registry = RuleRegistry()


def register_rule(rule_cls: Type[Rule]) -> Type[Rule]:
    registry.register(rule_cls)
    return rule_cls
