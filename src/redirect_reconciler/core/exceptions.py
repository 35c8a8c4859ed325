"""
Typed exceptions to keep failure modes explicit and testable.
"""


class ConfigError(RuntimeError):
    """Configuration missing/invalid."""


class ValidationError(RuntimeError):
    """Bad input (e.g., unsupported redirect scheme or empty domain)."""


class Route53ReadError(RuntimeError):
    """Hosted zone / record set listing failures."""


class RunFailure(RuntimeError):
    """A reconciliation step failed; remaining steps were not attempted."""

    def __init__(self, step: str, resource: str, reason: str = ""):
        self.step = step
        self.resource = resource
        self.reason = reason
        msg = f"Failed to {step}: {resource}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)
