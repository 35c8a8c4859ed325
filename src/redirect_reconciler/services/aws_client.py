"""
boto3-backed ResourceClient: S3 for the redirect bucket, Route 53 for DNS.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..core.exceptions import Route53ReadError
from ..core.models import AliasTarget, Failed, HostedZone, RedirectTarget, ResourceRecordSet

logger = logging.getLogger(__name__)

# Buckets in us-east-1 must be created without a LocationConstraint.
DEFAULT_REGION = "us-east-1"


class AwsResourceClient:
    """Thin S3 + Route 53 wrapper for the operations the reconcilers need."""

    def __init__(self, s3: Any, route53: Any, region: str = DEFAULT_REGION):
        self._s3 = s3
        self._route53 = route53
        self._region = region

    @classmethod
    def from_session(cls, session: "boto3.session.Session") -> "AwsResourceClient":
        region = session.region_name or DEFAULT_REGION
        return cls(session.client("s3", region_name=region), session.client("route53"), region)

    # ---------- S3 ----------

    def bucket_exists(self, name: str) -> bool:
        try:
            self._s3.head_bucket(Bucket=name)
            return True
        except (ClientError, BotoCoreError):
            # 404 / 403 / region mismatch will land here
            logger.debug("HeadBucket failed", extra={"stage": "s3_head", "bucket": name}, exc_info=True)
            return False

    def create_bucket(self, name: str) -> Optional[Failed]:
        kwargs: Dict[str, Any] = {"Bucket": name}
        if self._region != DEFAULT_REGION:
            kwargs["CreateBucketConfiguration"] = {"LocationConstraint": self._region}
        try:
            self._s3.create_bucket(**kwargs)
            logger.info("Created bucket", extra={"stage": "s3_create", "bucket": name, "status": "OK"})
            return None
        except (ClientError, BotoCoreError) as e:
            logger.error("S3 create_bucket failed", extra={"stage": "s3_create", "bucket": name}, exc_info=True)
            return Failed(str(e))

    def get_bucket_website(self, name: str) -> Optional[RedirectTarget]:
        try:
            resp = self._s3.get_bucket_website(Bucket=name)
        except (ClientError, BotoCoreError):
            # NoSuchWebsiteConfiguration is the normal case for a fresh bucket.
            logger.warning("GetBucketWebsite failed; treating as unset",
                           extra={"stage": "s3_website_get", "bucket": name}, exc_info=True)
            return None
        return RedirectTarget.from_api(resp)

    def put_bucket_website(self, name: str, target: RedirectTarget) -> Optional[Failed]:
        try:
            self._s3.put_bucket_website(Bucket=name, WebsiteConfiguration=target.to_api())
            logger.info("Wrote website redirect", extra={"stage": "s3_website_put", "bucket": name, "status": "OK"})
            return None
        except (ClientError, BotoCoreError) as e:
            logger.error("S3 put_bucket_website failed", extra={"stage": "s3_website_put", "bucket": name},
                         exc_info=True)
            return Failed(str(e))

    # ---------- Route 53 ----------

    def list_hosted_zones(self) -> List[HostedZone]:
        zones: List[HostedZone] = []
        try:
            for page in self._route53.get_paginator("list_hosted_zones").paginate():
                for z in page["HostedZones"]:
                    zones.append(HostedZone(id=z["Id"], name=z["Name"], existed_before=True))
        except (ClientError, BotoCoreError) as e:
            logger.error("Route53 list_hosted_zones failed", extra={"stage": "r53_zones"}, exc_info=True)
            raise Route53ReadError(str(e)) from e
        return zones

    def create_hosted_zone(self, name: str, caller_reference: str) -> Union[HostedZone, Failed]:
        try:
            resp = self._route53.create_hosted_zone(Name=name, CallerReference=caller_reference)
        except (ClientError, BotoCoreError) as e:
            logger.error("Route53 create_hosted_zone failed", extra={"stage": "r53_zone_create", "domain": name},
                         exc_info=True)
            return Failed(str(e))
        z = resp["HostedZone"]
        logger.info("Created hosted zone", extra={"stage": "r53_zone_create", "zone_id": z["Id"], "status": "OK"})
        return HostedZone(id=z["Id"], name=z["Name"], existed_before=False)

    def list_resource_records(self, zone_id: str, start_name: str, start_type: str) -> List[ResourceRecordSet]:
        try:
            resp = self._route53.list_resource_record_sets(
                HostedZoneId=zone_id,
                StartRecordName=start_name,
                StartRecordType=start_type,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("Route53 list_resource_record_sets failed", extra={"stage": "r53_records", "zone_id": zone_id},
                         exc_info=True)
            raise Route53ReadError(str(e)) from e
        return [ResourceRecordSet.from_api(r) for r in resp.get("ResourceRecordSets", [])]

    def upsert_resource_record(self, zone_id: str, name: str, alias_target: AliasTarget) -> Optional[Failed]:
        change = {
            "Action": "UPSERT",
            "ResourceRecordSet": {"Name": name, "Type": "A", "AliasTarget": alias_target.to_api()},
        }
        try:
            self._route53.change_resource_record_sets(HostedZoneId=zone_id, ChangeBatch={"Changes": [change]})
            logger.info("Upserted alias record",
                        extra={"stage": "r53_upsert", "zone_id": zone_id, "domain": name, "status": "OK"})
            return None
        except (ClientError, BotoCoreError) as e:
            logger.error("Route53 change_resource_record_sets failed",
                         extra={"stage": "r53_upsert", "zone_id": zone_id, "domain": name}, exc_info=True)
            return Failed(str(e))
