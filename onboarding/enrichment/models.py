from dataclasses import dataclass, field


@dataclass
class EnrichmentResult:
    """Best-effort lookup outcome. Never carries a validity verdict."""

    patch: dict[str, str] = field(default_factory=dict)
    applied: dict[str, object] = field(default_factory=dict)
    looked_up: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failures: list[str] = field(default_factory=list)
