"""Pytest configuration and fixtures."""

from collections import Counter
from typing import Dict, List, Optional, Set, Union

import pytest

from redirect_reconciler.core.exceptions import Route53ReadError
from redirect_reconciler.core.models import (
    AliasTarget,
    Failed,
    HostedZone,
    RedirectTarget,
    ResourceRecordSet,
)
from redirect_reconciler.orchestrators.redirect_pipeline import RedirectPipeline


# =============================================================================
# In-memory ResourceClient
# =============================================================================


class FakeResourceClient:
    """ResourceClient double with in-memory state, call counting and failure injection."""

    def __init__(self):
        self.buckets: Set[str] = set()
        self.websites: Dict[str, RedirectTarget] = {}
        self.zones: List[HostedZone] = []
        # zone id -> ordered record sets, as the provider would list them
        self.records: Dict[str, List[ResourceRecordSet]] = {}
        self.page_size: Optional[int] = None
        self.calls: Counter = Counter()
        self.caller_references: List[str] = []
        self.fail: Set[str] = set()

    def _maybe_fail(self, op: str) -> Optional[Failed]:
        return Failed(f"{op} rejected") if op in self.fail else None

    def bucket_exists(self, name: str) -> bool:
        self.calls["bucket_exists"] += 1
        return name in self.buckets

    def create_bucket(self, name: str) -> Optional[Failed]:
        self.calls["create_bucket"] += 1
        failed = self._maybe_fail("create_bucket")
        if failed is None:
            self.buckets.add(name)
        return failed

    def get_bucket_website(self, name: str) -> Optional[RedirectTarget]:
        self.calls["get_bucket_website"] += 1
        return self.websites.get(name)

    def put_bucket_website(self, name: str, target: RedirectTarget) -> Optional[Failed]:
        self.calls["put_bucket_website"] += 1
        failed = self._maybe_fail("put_bucket_website")
        if failed is None:
            self.websites[name] = target
        return failed

    def list_hosted_zones(self) -> List[HostedZone]:
        self.calls["list_hosted_zones"] += 1
        if "list_hosted_zones" in self.fail:
            raise Route53ReadError("list_hosted_zones unavailable")
        return list(self.zones)

    def create_hosted_zone(self, name: str, caller_reference: str) -> Union[HostedZone, Failed]:
        self.calls["create_hosted_zone"] += 1
        self.caller_references.append(caller_reference)
        failed = self._maybe_fail("create_hosted_zone")
        if failed is not None:
            return failed
        zone = HostedZone(id=f"/hostedzone/Z{len(self.zones) + 1:04d}", name=f"{name}.")
        self.zones.append(zone)
        self.records[zone.id] = []
        return zone

    def list_resource_records(self, zone_id: str, start_name: str, start_type: str) -> List[ResourceRecordSet]:
        self.calls["list_resource_records"] += 1
        if "list_resource_records" in self.fail:
            raise Route53ReadError("list_resource_record_sets unavailable")
        rrsets = self.records.get(zone_id, [])
        return rrsets[: self.page_size] if self.page_size is not None else list(rrsets)

    def upsert_resource_record(self, zone_id: str, name: str, alias_target: AliasTarget) -> Optional[Failed]:
        self.calls["upsert_resource_record"] += 1
        failed = self._maybe_fail("upsert_resource_record")
        if failed is not None:
            return failed
        fqdn = f"{name}."
        rrsets = [r for r in self.records.setdefault(zone_id, []) if not (r.name == fqdn and r.type == "A")]
        rrsets.append(ResourceRecordSet(fqdn, "A", alias_target))
        self.records[zone_id] = rrsets
        return None

    @property
    def mutations(self) -> int:
        return sum(
            self.calls[op]
            for op in ("create_bucket", "put_bucket_website", "create_hosted_zone", "upsert_resource_record")
        )


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def alias_target() -> AliasTarget:
    return AliasTarget(
        hosted_zone_id="Z3AQBSTGFYJSTF",
        dns_name="s3-website-us-east-1.amazonaws.com.",
        evaluate_target_health=False,
    )


@pytest.fixture
def client() -> FakeResourceClient:
    return FakeResourceClient()


@pytest.fixture
def pipeline(client, alias_target) -> RedirectPipeline:
    return RedirectPipeline(client, alias_target)
