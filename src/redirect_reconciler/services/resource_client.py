"""
Capability set the reconcilers depend on.

Implementations are plain request/response: no retries, no comparisons.
Writes report rejection by returning ``Failed`` rather than raising.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, Union

from ..core.models import AliasTarget, Failed, HostedZone, RedirectTarget, ResourceRecordSet


class ResourceClient(Protocol):
    def bucket_exists(self, name: str) -> bool:
        """False on any provider error, including 403/404."""
        ...

    def create_bucket(self, name: str) -> Optional[Failed]:
        ...

    def get_bucket_website(self, name: str) -> Optional[RedirectTarget]:
        """None when unset or unreadable."""
        ...

    def put_bucket_website(self, name: str, target: RedirectTarget) -> Optional[Failed]:
        ...

    def list_hosted_zones(self) -> List[HostedZone]:
        """Raises Route53ReadError when the listing fails."""
        ...

    def create_hosted_zone(self, name: str, caller_reference: str) -> Union[HostedZone, Failed]:
        ...

    def list_resource_records(self, zone_id: str, start_name: str, start_type: str) -> List[ResourceRecordSet]:
        """First page only. Raises Route53ReadError when the listing fails."""
        ...

    def upsert_resource_record(self, zone_id: str, name: str, alias_target: AliasTarget) -> Optional[Failed]:
        ...
