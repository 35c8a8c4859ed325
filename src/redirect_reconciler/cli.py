"""
Command-line entrypoint: converge one domain redirect and print the step tree.

    redirect-reconciler old.example.com https://example.com --hosted-zone old.example.com
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional, TextIO

from botocore.exceptions import BotoCoreError

from .core.exceptions import ConfigError, RunFailure, ValidationError
from .core.logging_config import setup_logging
from .core.models import Outcome, RunReport
from .core.settings import Settings
from .orchestrators.redirect_pipeline import RedirectPipeline
from .reconcilers import bucket, record, website, zone

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_RUN_FAILED = 1
EXIT_BAD_INPUT = 2

# step -> (heading, {outcome: leaf line})
_STEP_LINES = {
    bucket.STEP: ("Creating Bucket for domain.", {
        Outcome.UNCHANGED: "Bucket already exists, skipping.",
        Outcome.CREATED: "Bucket created.",
    }),
    website.STEP: ("Updating website for Bucket.", {
        Outcome.UNCHANGED: "Bucket website unchanged, skipping.",
        Outcome.UPDATED: "Bucket website updated.",
    }),
    zone.STEP: ("Creating Hosted Zone.", {
        Outcome.UNCHANGED: "Hosted Zone already exists, skipping.",
        Outcome.CREATED: "Hosted Zone created.",
    }),
    record.STEP: ("Creating Hosted Zone Record.", {
        Outcome.UNCHANGED: "Hosted Zone Record already exists, skipping.",
        Outcome.CREATED: "Hosted Zone Record created.",
        Outcome.UPDATED: "Hosted Zone Record updated.",
    }),
}


def render_report(report: RunReport, out: TextIO) -> None:
    """Print the run as an indented tree, one heading and leaf per step."""
    out.write(f"Domain: {report.domain}\n")
    out.write(f"Redirect: {report.redirect_url}\n")
    for step in report.steps:
        heading, leaves = _STEP_LINES[step.step]
        out.write(f"    |- {heading}\n")
        out.write(f"    |    `- {leaves.get(step.outcome, step.outcome.value)}\n")
    out.write("    `- Completed.\n")


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="redirect-reconciler",
        description="Point a domain at a redirect URL via an S3 website bucket and a Route 53 alias record.",
    )
    parser.add_argument("domain", help="Domain to redirect; also the bucket name.")
    parser.add_argument("redirect_url", help="Target URL, http:// or https://.")
    parser.add_argument(
        "--hosted-zone",
        dest="hosted_zone_name",
        help="Route 53 hosted zone to manage the record in (default: the domain itself).",
    )
    parser.add_argument("--json", action="store_true", help="Print the run report as JSON instead of a tree.")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL.")
    return parser


def main(argv: Optional[List[str]] = None, pipeline: Optional[RedirectPipeline] = None) -> int:
    args = create_parser().parse_args(argv)
    setup_logging(args.log_level, json_logs=False)

    if pipeline is None:
        try:
            pipeline = RedirectPipeline.from_settings(Settings.from_env())
        except (ValueError, BotoCoreError) as e:
            logger.error("Configuration error: %s", e)
            return EXIT_BAD_INPUT

    try:
        report = pipeline.run(args.domain, args.hosted_zone_name, args.redirect_url)
    except (ValidationError, ConfigError) as e:
        sys.stderr.write(f"error: {e}\n")
        return EXIT_BAD_INPUT
    except RunFailure as e:
        sys.stderr.write(f"error: {e}\n")
        return EXIT_RUN_FAILED

    if args.json:
        sys.stdout.write(json.dumps(report.to_dict(), indent=2) + "\n")
    else:
        render_report(report, sys.stdout)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
