"""Pre-flight check for the RSVP backend's ``.env`` file.

Run it before (re)starting the site, or from cron to catch drift:

1. ``AppSettings`` must load from the file. A missing Google client id or
   secret is reported here instead of as a broken consent popup later on.
2. The row timestamp timezone must be a known IANA zone, otherwise every RSVP
   submission would fail while formatting its row.
3. ``record`` stores a SHA256 baseline of the file and ``verify`` compares the
   current file against it.

Example usages::

    python -m scripts.check_env record --env-file /srv/wedding/.env \
        --hash-file /srv/wedding/.env.sha256

    python -m scripts.check_env verify --env-file /srv/wedding/.env \
        --hash-file /srv/wedding/.env.sha256
"""

from __future__ import annotations

import argparse
import hashlib
import sys
from pathlib import Path
from typing import Callable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import ValidationError

from wedding_rsvp.core.config import AppSettings, _load_env_file

EXIT_OK = 0
EXIT_VALIDATION_ERROR = 2
EXIT_CHECKSUM_ERROR = 3
EXIT_RUNTIME_ERROR = 5


def _compute_hash(env_file: Path) -> str:
    return hashlib.sha256(env_file.read_bytes()).hexdigest()


def _load_settings(env_file: Path) -> AppSettings:
    """Load settings from ``env_file`` and check values pydantic cannot."""
    _load_env_file(str(env_file))
    settings = AppSettings()  # type: ignore[call-arg]
    ZoneInfo(settings.timestamp_timezone)
    return settings


def _describe(settings: AppSettings) -> str:
    google = settings.google
    if google.sheet_id:
        sheet = f"fixed spreadsheet {google.sheet_id}"
    else:
        sheet = f"'{google.sheet_title}' (created on first RSVP)"
    return (
        f"Redirect URI: {google.redirect_uri}\n"
        f"Spreadsheet:  {sheet}\n"
        f"Database:     {settings.database_path}"
    )


def _record_checksum(env_file: Path, hash_file: Path) -> int:
    checksum = _compute_hash(env_file)
    hash_file.write_text(f"{checksum}\n", encoding="utf-8")
    print(f"Recorded checksum to {hash_file} ({checksum})")
    return EXIT_OK


def _verify_checksum(env_file: Path, hash_file: Path) -> int:
    if not hash_file.exists():
        print(
            f"Checksum baseline {hash_file} is missing; run 'record' first.",
            file=sys.stderr,
        )
        return EXIT_RUNTIME_ERROR

    expected = hash_file.read_text(encoding="utf-8").strip()
    actual = _compute_hash(env_file)
    if expected == actual:
        print("Environment checksum OK.")
        return EXIT_OK

    print(
        "Environment checksum mismatch!\n"
        f"  expected: {expected}\n"
        f"  actual:   {actual}\n"
        "Review the OAuth client and spreadsheet settings before restarting.",
        file=sys.stderr,
    )
    return EXIT_CHECKSUM_ERROR


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate RSVP backend settings and detect .env drift."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_env_file(subparser: argparse.ArgumentParser) -> None:
        subparser.add_argument(
            "--env-file",
            default=".env",
            type=Path,
            help="Path to the environment file (default: .env).",
        )

    def add_hash_file(subparser: argparse.ArgumentParser, help_text: str) -> None:
        subparser.add_argument("--hash-file", required=True, type=Path, help=help_text)

    record_parser = subparsers.add_parser(
        "record", help="Validate settings and store the checksum baseline."
    )
    add_env_file(record_parser)
    add_hash_file(record_parser, "Where to write the checksum baseline.")

    verify_parser = subparsers.add_parser(
        "verify", help="Validate settings and compare against the baseline."
    )
    add_env_file(verify_parser)
    add_hash_file(verify_parser, "Previously recorded checksum baseline.")

    check_parser = subparsers.add_parser(
        "check", help="Validate settings and print the effective OAuth setup."
    )
    add_env_file(check_parser)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    env_file: Path = args.env_file

    if not env_file.exists():
        print(f"Environment file {env_file} does not exist.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        settings = _load_settings(env_file)
    except ValidationError as exc:
        print(
            "Settings validation failed. Missing or invalid values detected:\n"
            f"{exc.json(indent=2)}",
            file=sys.stderr,
        )
        return EXIT_VALIDATION_ERROR
    except ZoneInfoNotFoundError as exc:
        print(f"Unknown TIMESTAMP_TIMEZONE: {exc}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except Exception as exc:  # pylint: disable=broad-except
        print(f"Unexpected error during validation: {exc}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    command: str = args.command
    handlers: dict[str, Callable[[], int]] = {
        "record": lambda: _record_checksum(env_file, args.hash_file),
        "verify": lambda: _verify_checksum(env_file, args.hash_file),
        "check": lambda: print(_describe(settings)) or EXIT_OK,
    }
    return handlers[command]()


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
