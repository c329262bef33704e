"""Substring-based role detection for container log payloads."""

from typing import Iterable

from container_split.config import DEFAULT_RULES, ClassificationRule


class Classifier:
    def __init__(self, rules: Iterable[ClassificationRule] = DEFAULT_RULES):
        self._rules = tuple(rules)

    def classify(self, text: str) -> str | None:
        """Return the label of the first rule whose pattern occurs in *text*.

        Rules are checked in table order, so a line matching several
        patterns gets the earliest one's label.
        """
        for rule in self._rules:
            if rule.pattern in text:
                return rule.label
        return None
