"""
Settings loader for the domain redirect reconciler.

- Loads config from environment (Lambda) or .env (local).
- Validates required keys.
- Exposes a frozen, typed dataclass for easy/explicit usage.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .models import AliasTarget

load_dotenv()


def _as_bool(raw: Optional[str]) -> bool:
    return str(raw or "").strip().lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class Settings:
    aws_region: str
    alias_hosted_zone_id: str
    alias_dns_name: str
    alias_evaluate_target_health: bool = False
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None

    @property
    def alias_target(self) -> AliasTarget:
        """Route 53 alias target every managed domain record points at."""
        return AliasTarget(
            hosted_zone_id=self.alias_hosted_zone_id,
            dns_name=self.alias_dns_name,
            evaluate_target_health=self.alias_evaluate_target_health,
        )

    @staticmethod
    def from_env() -> "Settings":
        """Construct settings from environment variables. Raises on missing keys."""
        def req(k: str) -> str:
            v = os.getenv(k)
            if not v:
                raise ValueError(f"Missing required environment variable: {k}")
            return v

        return Settings(
            aws_region=req("AWS_REGION"),
            alias_hosted_zone_id=req("ALIAS_HOSTED_ZONE_ID"),
            alias_dns_name=req("ALIAS_DNS_NAME"),
            alias_evaluate_target_health=_as_bool(os.getenv("ALIAS_EVALUATE_TARGET_HEALTH")),
            aws_access_key_id=os.getenv("AWS_ACCESS_KEY_ID") or None,
            aws_secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY") or None,
        )
