"""
Placeholder substitution for templates used in request steps.

Templates reference values with ``${name}`` or ``${name.property}``. Each
placeholder is resolved against, in order:

1. the replacement table (static configuration plus the scenario overlay)
2. the built-in tokens ``random_id`` and ``today``
3. the values saved from earlier responses in the scenario

Unresolvable placeholders are left in the output untouched.
"""

import random
import re
from collections.abc import Callable, Mapping
from datetime import date
from typing import Any

from api_fixture.common.common import stringify

PLACEHOLDER = re.compile(r"\$\{([^${}]+)\}")

RANDOM_ID_TOKEN = "random_id"
TODAY_TOKEN = "today"
RANDOM_ID_LIMIT = 10_000_000

_UNRESOLVED = object()


class Interpolator:
    """
    Resolves ``${...}`` placeholders against replacement and saved-value tables.

    The tables are read at call time, so an interpolator can be created once
    per scenario and will see values saved by later steps.
    """

    def __init__(
        self,
        replacements: Mapping[str, Any],
        store: Mapping[str, Any],
        *,
        rng: random.Random | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        """
        :param replacements: Static replacement values, matched by exact key.
        :param store: Values saved from responses during the scenario.
        :param rng: Random source for ``${random_id}``.
        :param today: Clock for ``${today}``.
        """
        self.replacements = replacements
        self.store = store
        self._rng = rng or random.Random()
        self._today = today

    def interpolate(self, template: str) -> str:
        """
        Substitute every resolvable placeholder in ``template``.

        Substitution is repeated until a full pass changes nothing, so replacement
        and saved values which themselves contain placeholders are expanded
        too. The number of passes is bounded by the combined size of the
        replacement and saved-value tables.

        :param template: Text that may contain ``${...}`` placeholders.
        :returns: The text with resolvable placeholders replaced.
        """
        # Every ${random_id} in one template gets the same value.
        random_id = str(self._rng.randrange(RANDOM_ID_LIMIT))
        today = self._today().isoformat()

        def substitute(match: re.Match[str]) -> str:
            name = match.group(1)
            if name == RANDOM_ID_TOKEN and name not in self.replacements:
                return random_id
            if name == TODAY_TOKEN and name not in self.replacements:
                return today
            value = self.resolve(name)
            if value is _UNRESOLVED:
                return match.group(0)
            return stringify(value)

        result = template
        for _ in range(len(self.replacements) + len(self.store) + 1):
            replaced = PLACEHOLDER.sub(substitute, result)
            if replaced == result:
                break
            result = replaced

        return result

    def resolve(self, name: str) -> Any:
        """
        Look up a placeholder name in the replacement and saved-value tables.

        :param name: Placeholder name without the ``${`` and ``}`` delimiters.
        :returns: The bound value, or a sentinel if the name cannot be resolved.
        """
        if name in self.replacements:
            return self.replacements[name]
        if name in self.store:
            return self.store[name]

        # Longest saved key first so "a.b" wins over "a" for "${a.b.c}".
        segments = name.split(".")
        for split in range(len(segments) - 1, 0, -1):
            key = ".".join(segments[:split])
            if key in self.store:
                return _lookup_property(self.store[key], segments[split:])

        return _UNRESOLVED


def _lookup_property(value: Any, properties: list[str]) -> Any:
    """
    Walk string-keyed mappings along ``properties``.

    :returns: The nested value, or the unresolved sentinel if any step of the
        walk does not land on a mapping containing the property.
    """
    current = value
    for prop in properties:
        if not isinstance(current, Mapping) or prop not in current:
            return _UNRESOLVED
        current = current[prop]
    return current
