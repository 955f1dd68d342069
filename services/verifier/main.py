"""
Verifier CLI
============

Verify a published proof artifact offline.

Usage:
    scoreproof-verify [--threshold T] [--protocol-version N] [FILE]

Reads the artifact JSON from FILE, or from stdin when FILE is omitted.
Exits 0 when the proof verifies and 1 otherwise.
"""

import argparse
import sys

from services.verifier.verifier import verify_artifact
from shared.config import settings
from shared.logging import setup_logging
from shared.zk import ProtocolVersionError, get_parameters


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scoreproof-verify",
        description="Verify a score threshold proof artifact",
    )
    parser.add_argument(
        "file",
        nargs="?",
        help="Artifact JSON file (default: stdin)",
    )
    parser.add_argument(
        "--threshold", "-t",
        type=int,
        default=settings.verifier.threshold,
        help=f"Public threshold (default: {settings.verifier.threshold})",
    )
    parser.add_argument(
        "--protocol-version", "-p",
        type=int,
        default=settings.verifier.protocol_version,
        help=f"Protocol version (default: {settings.verifier.protocol_version})",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    # Keep stdout for the verdict
    setup_logging(log_level="WARNING", service_name="verifier")

    try:
        params = get_parameters(args.protocol_version)
    except ProtocolVersionError as e:
        print(f"FAILURE: {e}")
        return 1

    if args.file:
        with open(args.file, "rb") as f:
            document = f.read()
    else:
        document = sys.stdin.buffer.read()

    print(f"Verifying against public threshold: {args.threshold}")
    report = verify_artifact(document, args.threshold, params)
    print(report.message)
    return 0 if report.valid else 1


def run() -> None:
    """Console entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
