import argparse
import os
from collections.abc import Sequence
from pathlib import Path

CONFIG_ENV = "PAUSESTREAM_CONFIG"


def get_cli_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pausestream-demo",
        description=(
            "Run the pausable stream demo.\n\n"
            "A producer generates numbers, the stream maps them to squares and\n"
            "pauses its source once a square exceeds the configured threshold.\n"
            "While paused, no number is generated at all."
        ),
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        help=f"Path to a YAML configuration file (overrides {CONFIG_ENV})"
    )

    parser.add_argument(
        "-l", "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=(
            "Logging verbosity.\n"
            "DEBUG also traces every pull performed by the pump.\n\n"
            "Example:\n"
            "  --log-level DEBUG"
        ),
    )

    return parser.parse_args(argv)


def get_configfile() -> Path | None:
    raw = os.getenv(CONFIG_ENV)

    # No file is fine: defaults and environment variables apply
    if raw is None:
        return None

    file = Path(raw)
    if not file.is_file():
        raise SystemExit(
            f"[config] Configuration file not found: '{file}'.\n"
            "  - Use --config <file.yaml>\n"
            f"  - Or set the {CONFIG_ENV} environment variable"
        )

    return file
