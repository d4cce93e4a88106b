"""Error taxonomy shared by the application layer and the HTTP edge."""

from __future__ import annotations

from collections.abc import Iterable


class FreightFlowError(Exception):
    """Base class for errors raised by FreightFlow use cases."""


class ValidationError(FreightFlowError):
    """Malformed input rejected before any side effect took place."""

    def __init__(self, violations: Iterable[str]) -> None:
        self.violations = list(violations)
        super().__init__("; ".join(self.violations) or "Invalid input")


class NotFoundError(FreightFlowError):
    """A role-scoped lookup matched no record visible to the caller."""

    def __init__(self, resource: str, identifier: object) -> None:
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} {identifier} not found")


class UpstreamUnavailableError(FreightFlowError):
    """A dependency such as the datastore or the mail transport did not respond."""

    def __init__(self, dependency: str, detail: str | None = None) -> None:
        self.dependency = dependency
        self.detail = detail
        message = f"{dependency} is unavailable"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


__all__ = [
    "FreightFlowError",
    "NotFoundError",
    "UpstreamUnavailableError",
    "ValidationError",
]
