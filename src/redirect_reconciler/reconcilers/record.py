"""
Ensure the domain's A alias record points at the configured target.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..core.exceptions import Route53ReadError
from ..core.models import AliasTarget, Failed, Outcome, ResourceRecordSet, StepResult
from ..services.resource_client import ResourceClient

logger = logging.getLogger(__name__)

STEP = "create zone record"
RECORD_TYPE = "A"


class RecordReconciler:
    def __init__(self, client: ResourceClient):
        self._client = client

    def find_record(self, domain: str, zone_id: str) -> Optional[ResourceRecordSet]:
        # One page only: a match further down the listing is missed and the
        # upsert below simply rewrites it.
        fqdn = f"{domain}."
        for rrset in self._client.list_resource_records(zone_id, domain, RECORD_TYPE):
            if rrset.name == fqdn and rrset.type == RECORD_TYPE:
                return rrset
        return None

    def ensure_record(self, domain: str, zone_id: str, desired_alias_target: AliasTarget) -> StepResult:
        try:
            current = self.find_record(domain, zone_id)
        except Route53ReadError as e:
            return StepResult(STEP, domain, Outcome.FAILED, reason=str(e))

        if current is not None and current.alias_target == desired_alias_target:
            record = ResourceRecordSet(current.name, current.type, current.alias_target, existed_before=True)
            logger.info("Zone record already exists",
                        extra={"stage": "record", "zone_id": zone_id, "domain": domain, "outcome": "unchanged"})
            return StepResult(STEP, domain, Outcome.UNCHANGED, value=record)

        result = self._client.upsert_resource_record(zone_id, domain, desired_alias_target)
        if isinstance(result, Failed):
            return StepResult(STEP, domain, Outcome.FAILED, reason=result.reason)

        outcome = Outcome.CREATED if current is None else Outcome.UPDATED
        record = ResourceRecordSet(f"{domain}.", RECORD_TYPE, desired_alias_target, existed_before=False)
        logger.info("Zone record upserted",
                    extra={"stage": "record", "zone_id": zone_id, "domain": domain, "outcome": outcome.value})
        return StepResult(STEP, domain, outcome, value=record)
