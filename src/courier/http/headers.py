"""Case-insensitive, read-only request headers."""

from collections.abc import Iterable, Iterator, Mapping


class Headers(Mapping[str, str]):
    """Header pairs in arrival order, looked up without regard to case.

    Built from a mapping or from ``(name, value)`` pairs. Indexing yields
    the first value for a name; ``get_list`` yields every value::

        Headers([("Accept", "text/html"), ("accept", "application/json")])
    """

    __slots__ = ("_index", "_raw")

    def __init__(
        self,
        raw: Mapping[str, str] | Iterable[tuple[str, str]] = (),
    ) -> None:
        pairs = tuple(
            (str(name), str(value))
            for name, value in (raw.items() if isinstance(raw, Mapping) else raw)
        )
        index: dict[str, list[str]] = {}
        for name, value in pairs:
            index.setdefault(name.lower(), []).append(value)
        object.__setattr__(self, "_raw", pairs)
        object.__setattr__(self, "_index", index)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"Headers is read-only (tried to set {name!r})")

    def __getitem__(self, key: str) -> str:
        values = self._index.get(key.lower())
        if not values:
            raise KeyError(key)
        return values[0]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        return f"Headers({list(self._raw)!r})"

    def get_list(self, key: str) -> list[str]:
        return list(self._index.get(key.lower(), ()))

    def with_header(self, name: str, value: str) -> "Headers":
        """Copy with one more ``(name, value)`` pair appended."""
        return Headers((*self._raw, (name, value)))

    @property
    def raw(self) -> tuple[tuple[str, str], ...]:
        """Every pair with its original casing."""
        return self._raw
