"""Regular-expression rules matched against host names."""

from __future__ import annotations

import logging
import re
from typing import Iterable

log = logging.getLogger(__name__)


class RuleError(Exception):
    """Raised when a rule is given bad arguments or a bad pattern."""


class Rule:
    """A pattern that host names are searched against."""

    def __init__(self, pattern: str | None = None) -> None:
        self.pattern = pattern
        self._regex: re.Pattern[str] | None = None

    def accept_arg(self, arg: str) -> None:
        """Take *arg* as the pattern; a rule takes only one argument."""
        if self.pattern is not None:
            log.error("Unexpected table rule argument: %s", arg)
            raise RuleError(f"Unexpected table rule argument: {arg}")
        self.pattern = arg

    def compile(self) -> None:
        """Compile the pattern, raising RuleError if it is invalid."""
        if self._regex is not None:
            return
        if self.pattern is None:
            raise RuleError("rule has no pattern")
        try:
            self._regex = re.compile(self.pattern)
        except re.error as exc:
            log.error("regex compilation failed at offset %s: %s", exc.pos, exc.msg)
            raise RuleError(
                f"regex compilation failed at offset {exc.pos}: {exc.msg}"
            ) from exc

    def matches(self, name: str | None) -> bool:
        """Return True if the pattern occurs anywhere in *name*."""
        self.compile()
        assert self._regex is not None
        return self._regex.search(name or "") is not None

    def __repr__(self) -> str:
        return f"Rule({self.pattern!r})"


def lookup_rule(rules: Iterable[Rule], name: str | None) -> Rule | None:
    """Return the first rule that matches *name*, or None."""
    return next((rule for rule in rules if rule.matches(name)), None)