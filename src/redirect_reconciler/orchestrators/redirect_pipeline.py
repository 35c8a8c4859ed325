"""
Orchestrator that converges bucket, website redirect, hosted zone and alias record.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..core.exceptions import RunFailure
from ..core.models import AliasTarget, DesiredState, RunReport, StepResult
from ..core.settings import Settings
from ..reconcilers import bucket, record, website, zone
from ..services.aws_client import AwsResourceClient
from ..services.resource_client import ResourceClient

logger = logging.getLogger(__name__)


class RedirectPipeline:
    """Runs the reconcilers in order and stops at the first failure."""

    def __init__(self, client: ResourceClient, alias_target: AliasTarget):
        self._alias_target = alias_target
        self._bucket = bucket.BucketReconciler(client)
        self._website = website.RedirectReconciler(client)
        self._zone = zone.ZoneReconciler(client)
        self._record = record.RecordReconciler(client)

    @classmethod
    def from_settings(cls, cfg: Settings) -> "RedirectPipeline":
        session = boto3.Session(
            aws_access_key_id=cfg.aws_access_key_id,
            aws_secret_access_key=cfg.aws_secret_access_key,
            region_name=cfg.aws_region,
        )
        return cls(AwsResourceClient.from_session(session), cfg.alias_target)

    def run(self, domain: str, hosted_zone_name: Optional[str], redirect_url: str) -> RunReport:
        """
        Converge all four resources for `domain`.
        Raises ValidationError on bad input and RunFailure naming the failed step.
        Steps already applied are left in place.
        """
        desired = DesiredState(
            domain=domain,
            hosted_zone_name=hosted_zone_name or domain,
            redirect_url=redirect_url,
            alias_target=self._alias_target,
        )
        report = RunReport(domain=desired.domain, redirect_url=desired.redirect_url)
        logger.info("Run started", extra={"stage": "run", "domain": domain, "status": "STARTED"})

        self._step(report, bucket.STEP, desired.domain, self._bucket.ensure_bucket, desired.domain)
        self._step(report, website.STEP, desired.domain,
                   self._website.ensure_redirect, desired.domain, desired.redirect_url)
        hosted_zone = self._step(report, zone.STEP, desired.hosted_zone_name,
                                 self._zone.ensure_zone, desired.hosted_zone_name).value
        self._step(report, record.STEP, desired.domain,
                   self._record.ensure_record, desired.domain, hosted_zone.id, desired.alias_target)

        logger.info("Run complete", extra={
            "stage": "run", "domain": domain, "status": "SUCCESS",
            "outcome": "changed" if report.changed else "unchanged",
        })
        return report

    @staticmethod
    def _step(report: RunReport, step: str, resource: str, fn: Callable[..., StepResult], *args: Any) -> StepResult:
        try:
            result = fn(*args)
        except (ClientError, BotoCoreError) as e:
            logger.error("Step raised", extra={"stage": step, "domain": resource, "status": "FAILED"}, exc_info=True)
            raise RunFailure(step, resource, str(e)) from e
        if not result.ok:
            logger.error("Step failed",
                         extra={"stage": step, "domain": resource, "status": "FAILED", "reason": result.reason})
            raise RunFailure(step, resource, result.reason or "")
        report.steps.append(result)
        return result
