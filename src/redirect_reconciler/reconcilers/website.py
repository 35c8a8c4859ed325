"""
Ensure the bucket's website configuration redirects every request.
"""

from __future__ import annotations

import logging

from ..core.models import BucketState, Failed, Outcome, RedirectTarget, StepResult
from ..services.resource_client import ResourceClient

logger = logging.getLogger(__name__)

STEP = "update bucket website"


class RedirectReconciler:
    def __init__(self, client: ResourceClient):
        self._client = client

    def ensure_redirect(self, domain: str, redirect_url: str) -> StepResult:
        """
        Compare the live redirect to the one derived from `redirect_url`.

        A mismatch overwrites the whole website configuration; index/error
        documents or routing rules set by hand are dropped.
        """
        current = self._client.get_bucket_website(domain)
        desired = RedirectTarget.from_url(redirect_url)

        if current is not None and current.host_name == desired.host_name and current.protocol == desired.protocol:
            logger.info("Bucket website unchanged", extra={"stage": "website", "bucket": domain, "outcome": "unchanged"})
            return StepResult(STEP, domain, Outcome.UNCHANGED, value=BucketState(True, current))

        result = self._client.put_bucket_website(domain, desired)
        if isinstance(result, Failed):
            return StepResult(STEP, domain, Outcome.FAILED, reason=result.reason)
        logger.info("Bucket website updated", extra={"stage": "website", "bucket": domain, "outcome": "updated"})
        return StepResult(STEP, domain, Outcome.UPDATED, value=BucketState(True, desired))
