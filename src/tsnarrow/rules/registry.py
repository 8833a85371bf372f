"""Rule registry: ordered built-in and custom rules, first match wins."""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import yaml

from tsnarrow.config.schema import TsNarrowConfig
from tsnarrow.errors import RuleError
from tsnarrow.logging import get_logger
from tsnarrow.rules.models import ReplacementRule

CUSTOM_RULES_DIRNAME = ".tsnarrow-rules"

log = get_logger("rules")


class RuleRegistry:
    """Central, ordered store for replacement rules.

    Insertion order is the match priority. Re-registering an id replaces the
    rule in place without changing its position.
    """

    def __init__(self) -> None:
        self._rules: Dict[str, ReplacementRule] = {}
        self._disabled: set[str] = set()

    # ---- registration ----

    def register(self, rule: ReplacementRule) -> None:
        self._rules[rule.id] = rule

    def register_many(self, rules: Iterable[ReplacementRule]) -> None:
        for r in rules:
            self.register(r)

    def disable(self, rule_ids: Iterable[str]) -> None:
        self._disabled.update(rule_ids)

    # ---- queries ----

    @property
    def all_rules(self) -> List[ReplacementRule]:
        return list(self._rules.values())

    def get(self, rule_id: str) -> Optional[ReplacementRule]:
        return self._rules.get(rule_id)

    def enabled_rules(self) -> List[ReplacementRule]:
        return [r for r in self._rules.values() if r.id not in self._disabled]

    def fingerprint(self) -> str:
        """Digest of the enabled rules, in match order."""
        digest = hashlib.md5()
        for rule in self.enabled_rules():
            fields = (
                rule.id,
                rule.pattern,
                rule.replacement,
                rule.usage or "",
                rule.parent_kind or "",
            )
            digest.update("\x1f".join(fields).encode("utf-8"))
            digest.update(b"\x1e")
        return digest.hexdigest()

    def find(
        self,
        surface: str,
        *,
        usage: str,
        parent_kind: Optional[str] = None,
    ) -> Optional[ReplacementRule]:
        """Return the first enabled rule matching *surface* in this context."""
        for rule in self.enabled_rules():
            if rule.matches(surface, usage=usage, parent_kind=parent_kind):
                return rule
        return None

    # ---- custom rule loading ----

    def load_custom_rules(self, directory: Path) -> int:
        """Load YAML rule files from *directory*. Returns count loaded."""
        count = 0
        if not directory.is_dir():
            return 0
        for path in sorted(directory.iterdir()):
            if path.suffix in (".yaml", ".yml"):
                count += self._load_yaml_rules(path)
        return count

    def _load_yaml_rules(self, path: Path) -> int:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            raise RuleError(f"Failed to read rules from {path}: {exc}") from exc
        if data is None:
            return 0
        if not isinstance(data, list):
            data = [data]
        count = 0
        for entry in data:
            try:
                rule = ReplacementRule(
                    id=entry["id"],
                    pattern=entry["pattern"],
                    replacement=entry["replacement"],
                    description=entry.get("description", ""),
                    usage=entry.get("usage"),
                    parent_kind=entry.get("parent_kind"),
                )
            except (KeyError, TypeError, AttributeError) as exc:
                raise RuleError(f"Malformed rule in {path}: {exc}") from exc
            if rule.id in self._rules:
                raise RuleError(f"Rule id {rule.id} in {path} shadows an existing rule")
            self.register(rule)
            count += 1
        return count


def build_registry(config: TsNarrowConfig, project_root: Optional[Path] = None) -> RuleRegistry:
    """Create a populated, config-filtered rule registry."""
    from tsnarrow.rules.builtin import ALL_BUILTIN_RULES

    registry = RuleRegistry()
    registry.register_many(ALL_BUILTIN_RULES)

    if project_root is not None:
        loaded = registry.load_custom_rules(project_root / CUSTOM_RULES_DIRNAME)
        if loaded:
            log.info("custom_rules_loaded", count=loaded, root=str(project_root))

    registry.disable(config.rules.disable)
    return registry
