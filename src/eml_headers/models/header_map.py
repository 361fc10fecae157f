"""
Ordered, case-insensitive mapping of header field names to their values.
"""

from typing import Dict, Iterator, List, Optional, Tuple

from ..constants import ADDRESS_HEADERS


class HeaderMap:
    """
    Header fields in the order they were read.

    Field names compare case-insensitively; the spelling of the first occurrence is the
    one kept. A name that appears more than once (e.g. Received) keeps every value in
    order.
    """

    def __init__(self) -> None:
        self._names: Dict[str, str] = {}
        self._values: Dict[str, List[str]] = {}

    def add(self, name: str, value: str) -> None:
        """Append a value for name, creating the entry if needed."""
        key = name.lower()
        if key not in self._names:
            self._names[key] = name
            self._values[key] = []
        self._values[key].append(value)

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """First value for name, or default."""
        values = self._values.get(name.lower())
        return values[0] if values else default

    def get_all(self, name: str) -> List[str]:
        """All values for name in order; empty list if absent."""
        return list(self._values.get(name.lower(), []))

    def keys(self) -> List[str]:
        return list(self._names.values())

    def items(self) -> Iterator[Tuple[str, List[str]]]:
        for key, name in self._names.items():
            yield name, list(self._values[key])

    def address_fields(self) -> List[str]:
        """Names of fields that carry email addresses (From, To, Cc, ...)."""
        return [name for key, name in self._names.items() if key in ADDRESS_HEADERS]

    def to_dict(self) -> Dict[str, List[str]]:
        return {name: values for name, values in self.items()}

    def __getitem__(self, name: str) -> str:
        values = self._values.get(name.lower())
        if not values:
            raise KeyError(name)
        return values[0]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._names.values()))

    def __len__(self) -> int:
        return len(self._names)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeaderMap):
            return NotImplemented
        return list(self.items()) == list(other.items())

    def __repr__(self) -> str:
        return f"HeaderMap({self.to_dict()!r})"
