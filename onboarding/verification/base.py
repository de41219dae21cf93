import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import ClassVar

from onboarding.domain.models import VerificationResult, VerificationType

_NON_LETTERS_RE = re.compile(r"[^a-z]")


def names_match(first: str, second: str) -> bool:
    """Case, spacing and punctuation insensitive name comparison."""
    return bool(first) and _NON_LETTERS_RE.sub("", first.lower()) == _NON_LETTERS_RE.sub(
        "", second.lower()
    )


class BaseVerifier(ABC):
    """Contract for one external verification check."""

    VERIFICATION_TYPE: ClassVar[VerificationType]
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]]

    @abstractmethod
    def verify(self, subject: Mapping[str, str]) -> VerificationResult:
        """Run the check against validated, normalized record values.

        Args:
            subject: One value per name in REQUIRED_FIELDS.

        Raises:
            VerificationError: if the provider itself fails.
        """
