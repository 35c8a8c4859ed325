"""
Ensure the redirect bucket exists.
"""

from __future__ import annotations

import logging

from ..core.models import Failed, Outcome, StepResult
from ..services.resource_client import ResourceClient

logger = logging.getLogger(__name__)

STEP = "create bucket"


class BucketReconciler:
    """Creates the bucket named after the domain, once."""

    def __init__(self, client: ResourceClient):
        self._client = client

    def ensure_bucket(self, domain: str) -> StepResult:
        """
        Head the bucket and create it only when absent.

        Existence check and create are not atomic: a concurrent creator makes
        our create fail with a conflict, which is reported as FAILED.
        """
        if self._client.bucket_exists(domain):
            logger.info("Bucket already exists", extra={"stage": "bucket", "bucket": domain, "outcome": "unchanged"})
            return StepResult(STEP, domain, Outcome.UNCHANGED)

        result = self._client.create_bucket(domain)
        if isinstance(result, Failed):
            return StepResult(STEP, domain, Outcome.FAILED, reason=result.reason)
        logger.info("Bucket created", extra={"stage": "bucket", "bucket": domain, "outcome": "created"})
        return StepResult(STEP, domain, Outcome.CREATED)
