"""
Immutable keyed catalogs.

A catalog wraps a read-only mapping built once at startup. Lookups are
exact-key only. A miss raises UnknownCatalogKeyError whose message lists
every valid key, so a caller probing the catalog by trial and error is
always pointed at the full set.
"""

from types import MappingProxyType
from typing import Generic, Iterator, List, Mapping, Tuple, TypeVar

T = TypeVar("T")


class UnknownCatalogKeyError(KeyError):
    """Raised when a key is not present in a catalog."""

    def __init__(self, message: str, key: str, valid_keys: List[str]) -> None:
        super().__init__(message)
        self.message = message
        self.key = key
        self.valid_keys = valid_keys

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return self.message


class Catalog(Generic[T]):
    """
    Read-only, ordered mapping of key -> entry.

    Iteration order is the order of the mapping the catalog was built
    from and never changes.
    """

    def __init__(
        self,
        entries: Mapping[str, T],
        *,
        item_label: str,
        available_label: str,
    ) -> None:
        self._entries: Mapping[str, T] = MappingProxyType(dict(entries))
        self._item_label = item_label
        self._available_label = available_label

    def get(self, key: str) -> T:
        entry = self._entries.get(key)
        if entry is None:
            raise UnknownCatalogKeyError(
                self.unknown_key_message(key), key, self.keys()
            )
        return entry

    def unknown_key_message(self, key: str) -> str:
        return (
            f'{self._item_label} "{key}" not found. '
            f"{self._available_label}: {', '.join(self._entries)}"
        )

    def keys(self) -> List[str]:
        return list(self._entries)

    def values(self) -> List[T]:
        return list(self._entries.values())

    def items(self) -> List[Tuple[str, T]]:
        return list(self._entries.items())

    @property
    def mapping(self) -> Mapping[str, T]:
        return self._entries

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
