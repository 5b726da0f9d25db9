"""Ordered keyword rule tables for ingredient classification."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class KeywordRule(Generic[T]):
    """Yields value when any keyword is a substring of the text."""

    keywords: tuple[str, ...]
    value: T

    def matches(self, text: str) -> bool:
        return any(keyword in text for keyword in self.keywords)


def first_match(rules: Iterable[KeywordRule[T]], text: str) -> T | None:
    """Return the value of the first rule matching the lowercased text."""
    lowered = text.lower()
    for rule in rules:
        if rule.matches(lowered):
            return rule.value
    return None
