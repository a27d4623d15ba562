from dataclasses import dataclass


@dataclass(frozen=True)
class Finding:
    """One rule that fired on a fragment."""

    type: str  # rule label, e.g. "PHONE", "EMAIL", "ADDRESS"
    matched_excerpt: str | None = None


@dataclass(frozen=True)
class DetectionResult:
    """Output of running a rule table over one fragment."""

    findings: tuple[Finding, ...] = ()
    score: int = 0
    recommendations: tuple[str, ...] = ()

    @property
    def types(self) -> tuple[str, ...]:
        return tuple(finding.type for finding in self.findings)
