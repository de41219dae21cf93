from abc import ABC, abstractmethod


class BaseRegistryClient(ABC):
    """Contract for one external reference registry."""

    @abstractmethod
    def lookup(self, key: str) -> dict[str, str]:
        """Look up a validated, normalized key.

        Returns:
            MerchantRecord field values found for the key; empty when the
            registry does not know the key.

        Raises:
            RegistryError: if the lookup itself fails.
        """
