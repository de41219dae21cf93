"""Offline registry with canned entries, for local runs and demos."""

from typing import ClassVar

from onboarding.enrichment.base import BaseRegistryClient


class StaticRegistryClient(BaseRegistryClient):
    def __init__(self, entries: dict[str, dict[str, str]], key_length: int | None = None) -> None:
        self._entries = entries
        self._key_length = key_length

    def lookup(self, key: str) -> dict[str, str]:
        lookup_key = key[: self._key_length] if self._key_length else key
        return dict(self._entries.get(lookup_key, {}))


class StaticPostalCodeRegistry(StaticRegistryClient):
    ENTRIES: ClassVar[dict[str, dict[str, str]]] = {
        "400001": {"city": "Mumbai", "state": "Maharashtra"},
        "110001": {"city": "New Delhi", "state": "Delhi"},
        "560001": {"city": "Bangalore", "state": "Karnataka"},
    }

    def __init__(self) -> None:
        super().__init__(self.ENTRIES)


class StaticRoutingCodeRegistry(StaticRegistryClient):
    """Resolves the bank from the 4-letter bank prefix of a routing code."""

    ENTRIES: ClassVar[dict[str, dict[str, str]]] = {
        "SBIN": {"bank_name": "State Bank of India"},
        "HDFC": {"bank_name": "HDFC Bank"},
        "ICIC": {"bank_name": "ICICI Bank"},
        "UTIB": {"bank_name": "Axis Bank"},
        "KKBK": {"bank_name": "Kotak Mahindra Bank"},
    }

    def __init__(self) -> None:
        super().__init__(self.ENTRIES, key_length=4)
