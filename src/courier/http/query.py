"""Read-only view over URL-encoded parameters.

Serves both the request query string and
``application/x-www-form-urlencoded`` bodies.
"""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qsl


class QueryParams(Mapping[str, str]):
    """Decoded ``name=value`` pairs in their original order.

    Indexing returns the first value for a name; ``get_list`` returns
    every value. Blank values are kept.
    """

    _pairs: tuple[tuple[str, str], ...]
    _raw: str

    __slots__ = ("_pairs", "_raw")

    def __init__(self, query_string: str | bytes = "") -> None:
        raw = query_string.decode("latin-1") if isinstance(query_string, bytes) else query_string
        object.__setattr__(self, "_raw", raw)
        object.__setattr__(self, "_pairs", tuple(parse_qsl(raw, keep_blank_values=True)))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"QueryParams is read-only (tried to set {name!r})")

    def __getitem__(self, key: str) -> str:
        for name, value in self._pairs:
            if name == key:
                return value
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        return iter(dict.fromkeys(name for name, _ in self._pairs))

    def __len__(self) -> int:
        return len({name for name, _ in self._pairs})

    def __repr__(self) -> str:
        return f"QueryParams({self._raw!r})"

    def get_list(self, key: str) -> list[str]:
        return [value for name, value in self._pairs if name == key]

    def get_int(self, key: str, default: int | None = None) -> int | None:
        """First value for *key* as an int; *default* when absent or not numeric."""
        value = self.get(key)
        if value is None or not value.lstrip("-").isdigit():
            return default
        return int(value)

    @property
    def raw(self) -> str:
        return self._raw
