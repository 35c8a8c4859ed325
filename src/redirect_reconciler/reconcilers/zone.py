"""
Ensure a Route 53 hosted zone exists for a name.
"""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from ..core.exceptions import Route53ReadError
from ..core.models import Failed, HostedZone, Outcome, StepResult
from ..services.resource_client import ResourceClient

logger = logging.getLogger(__name__)

STEP = "create zone"


def zone_matches(zone_name: str, name: str) -> bool:
    """Exact, case-sensitive match after dropping the zone's trailing dot."""
    return zone_name[:-1] == name if zone_name.endswith(".") else zone_name == name


class ZoneReconciler:
    def __init__(self, client: ResourceClient):
        self._client = client

    def find_zone(self, name: str) -> Optional[HostedZone]:
        # Duplicate zone names are ambiguous input; the first listed wins.
        for zone in self._client.list_hosted_zones():
            if zone_matches(zone.name, name):
                return zone
        return None

    def ensure_zone(self, name: str) -> StepResult:
        """
        Reuse the zone called `name` or create it.

        The value of the returned result is the HostedZone; its
        `existed_before` flag tells reuse from creation. A listing failure is
        fatal: without it we cannot tell create from reuse.
        """
        try:
            existing = self.find_zone(name)
        except Route53ReadError as e:
            return StepResult(STEP, name, Outcome.FAILED, reason=str(e))

        if existing is not None:
            zone = HostedZone(id=existing.id, name=existing.name, existed_before=True)
            logger.info("Hosted zone already exists",
                        extra={"stage": "zone", "zone_id": zone.id, "domain": name, "outcome": "unchanged"})
            return StepResult(STEP, name, Outcome.UNCHANGED, value=zone)

        created = self._client.create_hosted_zone(name, str(uuid.uuid4()))
        if isinstance(created, Failed):
            return StepResult(STEP, name, Outcome.FAILED, reason=created.reason)
        zone = HostedZone(id=created.id, name=created.name, existed_before=False)
        logger.info("Hosted zone created", extra={"stage": "zone", "zone_id": zone.id, "domain": name, "outcome": "created"})
        return StepResult(STEP, name, Outcome.CREATED, value=zone)
