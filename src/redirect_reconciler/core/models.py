"""
Value types shared by the client, the reconcilers and the pipeline.

Everything here is plain data: conversion to and from the AWS API shapes
lives next to the type it describes so the reconcilers never touch raw dicts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional
from urllib.parse import urlsplit

from .exceptions import ValidationError

REDIRECT_PROTOCOLS = ("http", "https")


def ensure_trailing_dot(name: str) -> str:
    return name if name.endswith(".") else f"{name}."


class Outcome(Enum):
    """Result of one reconciliation step."""

    UNCHANGED = "unchanged"
    CREATED = "created"
    UPDATED = "updated"
    FAILED = "failed"


@dataclass(frozen=True)
class Failed:
    """A provider rejected a write; returned instead of raised."""
    reason: str


@dataclass(frozen=True)
class RedirectTarget:
    protocol: str
    host_name: str

    @classmethod
    def from_url(cls, url: str) -> "RedirectTarget":
        """
        Derive the S3 redirect target from a URL.

        The host name is everything after ``scheme://`` in the raw string, so
        a path or query survives: ``https://example.org/a?b=1`` redirects to
        host name ``example.org/a?b=1``.
        """
        scheme = urlsplit(url).scheme
        if scheme not in REDIRECT_PROTOCOLS:
            raise ValidationError(f"Unsupported redirect scheme: {url!r} (expected http or https)")
        # Schemes are case-insensitive; urlsplit has already lowercased ours.
        prefix = f"{scheme}://"
        if url[: len(prefix)].lower() != prefix or len(url) == len(prefix):
            raise ValidationError(f"Redirect URL has no host: {url!r}")
        return cls(protocol=scheme, host_name=url[len(prefix):])

    @classmethod
    def from_api(cls, website: Dict[str, Any]) -> Optional["RedirectTarget"]:
        """Read ``RedirectAllRequestsTo`` from a GetBucketWebsite response."""
        block = website.get("RedirectAllRequestsTo")
        if not block:
            return None
        return cls(protocol=block.get("Protocol", ""), host_name=block.get("HostName", ""))

    def to_api(self) -> Dict[str, Any]:
        return {"RedirectAllRequestsTo": {"HostName": self.host_name, "Protocol": self.protocol}}


@dataclass(frozen=True)
class BucketState:
    exists: bool
    website_redirect: Optional[RedirectTarget] = None


@dataclass(frozen=True)
class AliasTarget:
    """Route 53 alias target; compared field by field."""
    hosted_zone_id: str
    dns_name: str
    evaluate_target_health: bool = False

    def __post_init__(self) -> None:
        # Route 53 lists alias DNS names fully qualified.
        if self.dns_name:
            object.__setattr__(self, "dns_name", ensure_trailing_dot(self.dns_name))

    @classmethod
    def from_api(cls, alias: Optional[Dict[str, Any]]) -> Optional["AliasTarget"]:
        if not alias:
            return None
        return cls(
            hosted_zone_id=alias.get("HostedZoneId", ""),
            dns_name=alias.get("DNSName", ""),
            evaluate_target_health=bool(alias.get("EvaluateTargetHealth", False)),
        )

    def to_api(self) -> Dict[str, Any]:
        return {
            "HostedZoneId": self.hosted_zone_id,
            "DNSName": self.dns_name,
            "EvaluateTargetHealth": self.evaluate_target_health,
        }


@dataclass(frozen=True)
class HostedZone:
    id: str
    name: str
    existed_before: bool = False


@dataclass(frozen=True)
class ResourceRecordSet:
    name: str
    type: str
    alias_target: Optional[AliasTarget] = None
    existed_before: bool = False

    @classmethod
    def from_api(cls, rrset: Dict[str, Any]) -> "ResourceRecordSet":
        return cls(
            name=rrset["Name"],
            type=rrset["Type"],
            alias_target=AliasTarget.from_api(rrset.get("AliasTarget")),
        )


@dataclass(frozen=True)
class DesiredState:
    """Immutable input to a single run."""
    domain: str
    hosted_zone_name: str
    redirect_url: str
    alias_target: AliasTarget

    def __post_init__(self) -> None:
        if not self.domain:
            raise ValidationError("Domain must not be empty")
        if not self.hosted_zone_name:
            raise ValidationError("Hosted zone name must not be empty")
        # Fail before any provider call if the URL cannot be redirected to.
        RedirectTarget.from_url(self.redirect_url)


@dataclass(frozen=True)
class StepResult:
    step: str
    resource: str
    outcome: Outcome
    reason: Optional[str] = None
    value: Any = None

    @property
    def ok(self) -> bool:
        return self.outcome is not Outcome.FAILED

    @property
    def changed(self) -> bool:
        return self.outcome in (Outcome.CREATED, Outcome.UPDATED)


@dataclass
class RunReport:
    """Ordered step results of one successful run."""
    domain: str
    redirect_url: str
    steps: List[StepResult] = field(default_factory=list)

    def outcome_of(self, step: str) -> Optional[Outcome]:
        for s in self.steps:
            if s.step == step:
                return s.outcome
        return None

    @property
    def changed(self) -> bool:
        return any(s.changed for s in self.steps)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "domain": self.domain,
            "redirect_url": self.redirect_url,
            "changed": self.changed,
            "steps": [
                {"step": s.step, "resource": s.resource, "outcome": s.outcome.value, "reason": s.reason}
                for s in self.steps
            ],
        }
