from abc import abstractmethod

import httpx

from onboarding.enrichment.base import BaseRegistryClient
from onboarding.enrichment.exceptions import RegistryError, RegistryNetworkError


class HttpRegistryClient(BaseRegistryClient):
    """GET ``{base_url}/{key}`` and map the JSON body to record fields.

    A 404 means the registry does not know the key and yields an empty
    result. Subclasses implement ``_to_fields``.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: int = 10,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(timeout=timeout_seconds)

    def lookup(self, key: str) -> dict[str, str]:
        try:
            response = self._client.get(f"{self._base_url}/{key}")
        except httpx.TransportError as exc:
            raise RegistryNetworkError(f"Registry network error: {exc}") from exc
        if response.status_code == 404:
            return {}
        if response.status_code >= 400:
            raise RegistryError(f"Registry returned HTTP {response.status_code}")
        try:
            payload = response.json()
        except ValueError as exc:
            raise RegistryError(f"Registry returned invalid JSON: {exc}") from exc
        return {name: value for name, value in self._to_fields(payload).items() if value}

    @abstractmethod
    def _to_fields(self, payload: object) -> dict[str, str]:
        """Map a decoded body to record fields, raising RegistryError on a bad shape."""


class PostalCodeRegistryClient(HttpRegistryClient):
    """India Post pincode API: ``[{"Status": "Success", "PostOffice": [...]}]``."""

    def _to_fields(self, payload: object) -> dict[str, str]:
        if not isinstance(payload, list) or not payload or not isinstance(payload[0], dict):
            raise RegistryError("Unexpected postal code registry payload")
        entry = payload[0]
        offices = entry.get("PostOffice") or []
        if not isinstance(offices, list):
            raise RegistryError("Unexpected postal code registry payload")
        if entry.get("Status") != "Success" or not offices:
            return {}
        office = offices[0]
        if not isinstance(office, dict):
            raise RegistryError("Unexpected postal code registry payload")
        return {
            "city": str(office.get("District") or ""),
            "state": str(office.get("State") or ""),
        }


class RoutingCodeRegistryClient(HttpRegistryClient):
    """IFSC API: ``{"BANK": ..., "BRANCH": ..., ...}``."""

    def _to_fields(self, payload: object) -> dict[str, str]:
        if not isinstance(payload, dict):
            raise RegistryError("Unexpected routing code registry payload")
        return {"bank_name": str(payload.get("BANK") or "")}


class JsonRegistryClient(HttpRegistryClient):
    """Flat JSON object registry with a configurable key-to-field map."""

    def __init__(
        self,
        base_url: str,
        field_map: dict[str, str],
        *,
        timeout_seconds: int = 10,
        client: httpx.Client | None = None,
    ) -> None:
        super().__init__(base_url, timeout_seconds=timeout_seconds, client=client)
        self._field_map = field_map

    def _to_fields(self, payload: object) -> dict[str, str]:
        if not isinstance(payload, dict):
            raise RegistryError("Unexpected registry payload")
        return {
            record_field: str(payload.get(source_key) or "")
            for source_key, record_field in self._field_map.items()
        }
