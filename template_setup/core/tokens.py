"""
Placeholder token syntax.

A token is an uppercase-with-underscores name wrapped in double curly
braces, e.g. ``{{PROJECT_NAME}}``. Matching is case-sensitive, there is
no nesting and no escape sequence for a literal ``{{``.
"""

import re
from collections.abc import Iterator, Mapping
from typing import Any

TOKEN_NAME_PATTERN = re.compile(r"[A-Z_]+")
TOKEN_PATTERN = re.compile(r"\{\{([A-Z_]+)\}\}")


def is_token_name(name: str) -> bool:
    """Return True if name uses only the token alphabet."""
    return bool(TOKEN_NAME_PATTERN.fullmatch(name))


def placeholder(name: str) -> str:
    """Format a token name as it appears in template text.

    Raises:
        ValueError: If name is not in the [A-Z_]+ alphabet
    """
    if not is_token_name(name):
        raise ValueError(f"Invalid token name: {name!r} (expected [A-Z_]+)")
    return "{{" + name + "}}"


def find_tokens(text: str) -> list[str]:
    """Return token names in order of appearance, duplicates included."""
    return TOKEN_PATTERN.findall(text)


class ReplacementMapping(Mapping):
    """Immutable token name -> replacement value mapping.

    Built once per run and passed explicitly into every operation.
    Keys are validated against the token alphabet on construction, and
    no value may contain a token the mapping itself replaces, so applying
    it twice gives the same result as applying it once.

    Example:
        mapping = ReplacementMapping({"PROJECT_NAME": "Foo.Bar"})
        mapping["PROJECT_NAME"]  # "Foo.Bar"
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, Any] | None = None, **kwargs: Any):
        merged = dict(values or {})
        merged.update(kwargs)

        checked: dict[str, str] = {}
        for name, value in merged.items():
            if not isinstance(name, str) or not is_token_name(name):
                raise ValueError(f"Invalid token name: {name!r} (expected [A-Z_]+)")
            if value is None:
                raise ValueError(f"Missing replacement value for {name}")
            checked[name] = str(value)

        for name, value in checked.items():
            nested = sorted(set(find_tokens(value)) & checked.keys())
            if nested:
                raise ValueError(
                    f"Replacement value for {name} contains {placeholder(nested[0])}"
                    " (values cannot reference other mapped tokens)"
                )

        object.__setattr__(self, "_values", checked)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("ReplacementMapping is immutable")

    def __getitem__(self, name: str) -> str:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ReplacementMapping({self._values!r})"

    def merged(self, other: Mapping[str, Any]) -> "ReplacementMapping":
        """Return a new mapping with other's entries layered on top."""
        values = dict(self._values)
        values.update(other)
        return ReplacementMapping(values)

    def subset(self, names: set[str] | frozenset[str]) -> "ReplacementMapping":
        """Return a new mapping restricted to the given token names."""
        return ReplacementMapping({k: v for k, v in self._values.items() if k in names})
