"""
Lambda entrypoint that converges one domain redirect per invocation.

Event shape:
    {"domain": "old.example.com", "redirect_url": "https://example.com",
     "hosted_zone_name": "old.example.com"}   # hosted_zone_name optional

Environment: see core.settings for required variables.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from ..core.exceptions import ConfigError, RunFailure, ValidationError
from ..core.logging_config import setup_logging
from ..core.settings import Settings
from ..orchestrators.redirect_pipeline import RedirectPipeline

setup_logging()
logger = logging.getLogger(__name__)


def _extract_request(event: Dict[str, Any]) -> Dict[str, Any]:
    """Pull run arguments from the event. Raises ValidationError if malformed."""
    try:
        domain = event["domain"]
        redirect_url = event["redirect_url"]
    except (KeyError, TypeError) as e:
        raise ValidationError(f"Event missing field: {e}") from e
    return {
        "domain": domain,
        "hosted_zone_name": event.get("hosted_zone_name") or domain,
        "redirect_url": redirect_url,
    }


def handler(event: Dict[str, Any], _context: Any) -> Dict[str, Any]:
    """
    AWS Lambda handler.
    Returns the run report as a JSON-friendly dict; step failures re-raise so
    the invocation is marked failed.
    """
    try:
        cfg = Settings.from_env()
    except Exception as e:  # noqa: BLE001
        logger.error("Configuration error", exc_info=True)
        raise ConfigError(str(e)) from e

    pipeline = RedirectPipeline.from_settings(cfg)

    try:
        request = _extract_request(event)
        report = pipeline.run(**request)
    except ValidationError:
        logger.warning("Validation failed", extra={"stage": "lambda"}, exc_info=True)
        # Invalid input will not get better on retry.
        return {"error": "validation_failed"}
    except RunFailure as e:
        logger.error("Run failed", extra={"stage": "lambda", "status": "FAILED", "reason": e.reason})
        raise
    except Exception:  # noqa: BLE001
        logger.error("Unhandled error in redirect run", extra={"stage": "lambda"}, exc_info=True)
        raise

    logger.info("Redirect converged", extra={"stage": "lambda", "domain": report.domain, "status": "SUCCESS"})
    return report.to_dict()
