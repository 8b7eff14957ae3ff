import argparse
import os
from functools import lru_cache
from pathlib import Path


@lru_cache
def get_cli_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="framewire",
        description=(
            "Start a framewire echo server.\n\n"
            "Every length-prefixed message received on a connection is sent\n"
            "back to its peer, framed with the configured codec parameters."
        ),
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        help="Path to a framewire configuration file"
    )

    parser.add_argument(
        "-l", "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=(
            "Logging verbosity of the server.\n"
            "Choose among: DEBUG, INFO, WARNING, ERROR, CRITICAL.\n\n"
            "Example:\n"
            "  --log-level DEBUG"
        ),
    )

    return parser.parse_args()


@lru_cache
def get_configfile() -> Path | None:
    args = get_cli_args()

    # Priority: CLI > ENV > default file in current working directory
    raw = args.config or os.getenv("FRAMEWIRECONFIG")

    if raw is None:
        file = Path.cwd() / "framewire.yaml"
        # The default file is optional, built-in defaults apply without it
        return file if file.is_file() else None

    file = Path(raw)
    if not file.is_file():
        raise SystemExit(
            f"[config] Configuration file not found: '{file}'.\n"
            "  - Use --config <file.yaml>\n"
            "  - Or set the FRAMEWIRECONFIG environment variable\n"
            "  - Or place a 'framewire.yaml' file in the current working directory."
        )

    return file
