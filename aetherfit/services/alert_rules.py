"""Configurable air-quality alert rules."""
from __future__ import annotations

import threading

from aetherfit.models.schemas import AlertRule

DEFAULT_ALERT_RULES = (
    AlertRule(
        id=1,
        title="High Ozone Warning",
        description="Notify me when ozone exceeds 70 ppb in my area.",
        enabled=True,
    ),
    AlertRule(
        id=2,
        title="PM2.5 Spike",
        description="Alert when fine particulate matter rises above 35 µg/m³.",
        enabled=True,
    ),
    AlertRule(
        id=3,
        title="Ideal Running Window",
        description="Tell me when the AQFA score for running reaches 8 or higher.",
        enabled=False,
    ),
    AlertRule(
        id=4,
        title="Wildfire Smoke Advisory",
        description="Push a notification when smoke advisories are issued nearby.",
        enabled=True,
    ),
)


class AlertRuleStore:
    """In-memory list of alert rules with on/off toggling."""

    def __init__(self, rules: list[AlertRule] | tuple[AlertRule, ...] = DEFAULT_ALERT_RULES) -> None:
        self._lock = threading.Lock()
        self._rules: dict[int, AlertRule] = {rule.id: rule.model_copy() for rule in rules}

    def list_rules(self) -> list[AlertRule]:
        with self._lock:
            return [self._rules[rule_id] for rule_id in sorted(self._rules)]

    def toggle(self, rule_id: int) -> AlertRule:
        """Flip a rule's enabled flag. Raises KeyError for unknown ids."""

        with self._lock:
            rule = self._rules[rule_id]
            updated = rule.model_copy(update={"enabled": not rule.enabled})
            self._rules[rule_id] = updated
            return updated
