import math
from collections.abc import Mapping

from onboarding.domain.models import NUMERIC_FIELDS, RECORD_FIELDS


def coerce_patch(raw: Mapping[str, object]) -> dict[str, object]:
    """Turn raw request values into values the MerchantRecord stores.

    Text fields become stripped strings, numeric fields become floats and
    None passes through (it clears a field on user patches).

    Raises:
        ValueError: on an unknown field name or an unparseable number.
    """
    patch: dict[str, object] = {}
    for name, value in raw.items():
        if name not in RECORD_FIELDS:
            raise ValueError(f"Unknown merchant record field: {name}")
        if value is None:
            patch[name] = None
        elif name in NUMERIC_FIELDS:
            patch[name] = _coerce_number(name, value)
        else:
            patch[name] = str(value).strip()
    return patch


def _coerce_number(name: str, value: object) -> float | None:
    if isinstance(value, bool):
        raise ValueError(f"'{name}' must be a number")
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).replace(",", "").strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError as exc:
            raise ValueError(f"'{name}' must be a number, got {value!r}") from exc
    if not math.isfinite(number):
        raise ValueError(f"'{name}' must be a finite number, got {value!r}")
    return number
