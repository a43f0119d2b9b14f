#!/usr/bin/env python3
"""
genomad-verify CLI

Reads SOUL.md / IDENTITY.md / TOOLS.md and skills/ from the workspace,
derives the trait vector locally and registers traits + fingerprint.

Exit codes:
  0  verified (and registered unless --dry-run)
  2  workspace documents failed preconditions
  3  trait vector failed validation
  4  registration blocked by the fitness guard
  5  registry submission failed
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from config import settings
from alerts import send_block_alert
from core.traits.engine import verify_agent
from core.traits.errors import PreconditionError, SuspiciousFitnessBlock, TraitValidationError
from core.traits.models import VerificationResult
from core.traits.report import build_block_alert, build_registration_payload
from registry_client import GenomadClient, RegistrationError
from workspace import check_preconditions, extract_agent_name, read_agent_files

EXIT_OK = 0
EXIT_PRECONDITION = 2
EXIT_INVALID_TRAITS = 3
EXIT_SUSPICIOUS = 4
EXIT_SUBMISSION = 5

logger = logging.getLogger("genomad")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="genomad-verify",
        description="Derive an agent's trait vector locally and register it with Genomad.",
    )
    parser.add_argument("--workspace", help="Workspace directory (default: $OPENCLAW_WORKSPACE or cwd)")
    parser.add_argument("--name", help="Agent name (default: parsed from IDENTITY.md)")
    parser.add_argument(
        "--capability", action="append", default=[], metavar="ID",
        help="Extra installed capability identifier (repeatable)",
    )
    parser.add_argument("--dry-run", action="store_true", help="Compute and print, do not register")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    return parser


def print_result(result: VerificationResult, as_json: bool) -> None:
    if as_json:
        print(json.dumps(result.model_dump(mode="json"), indent=2, ensure_ascii=False))
        return

    print(f"Agent: {result.agent_name}")
    for trait, value in result.traits.items():
        print(f"  {trait:<12} {value:>3}")
    print(f"Fitness: {result.fitness.fitness:.2f} ({result.fitness.tier})")
    print(f"Confidence: {result.confidence}%")
    print(f"DNA hash: {result.fingerprint[:16]}...")
    for w in result.warnings:
        print(f"  warning: {w}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )

    files = read_agent_files(args.workspace or settings.OPENCLAW_WORKSPACE)
    capabilities = files.capabilities + list(args.capability)

    try:
        warnings = check_preconditions(files)
    except PreconditionError as e:
        for err in e.errors:
            logger.error("Precondition failed: %s", err)
        return EXIT_PRECONDITION

    agent_name = args.name or extract_agent_name(files.identity)
    documents = files.documents()

    try:
        result = verify_agent(
            documents=documents,
            capabilities=capabilities,
            agent_name=agent_name,
            warnings=warnings,
        )
    except TraitValidationError as e:
        for err in e.result.errors:
            logger.error("Invalid traits: %s", err)
        return EXIT_INVALID_TRAITS
    except SuspiciousFitnessBlock as block:
        alert = build_block_alert(block, agent_name=agent_name, documents=documents)
        send_block_alert(alert, settings)
        logger.error("Registration blocked: %s", alert.reason)
        return EXIT_SUSPICIOUS

    print_result(result, args.json)

    if args.dry_run:
        logger.info("Dry run; skipping registration")
        return EXIT_OK

    client = GenomadClient(settings.GENOMAD_API_URL, settings.REGISTRY_TIMEOUT)
    try:
        client.register(build_registration_payload(result))
    except RegistrationError as e:
        logger.error("Registration failed: %s", e)
        return EXIT_SUBMISSION

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
