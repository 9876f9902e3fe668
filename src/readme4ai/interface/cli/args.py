from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the parsed
namespace into explicit setting overrides (the highest precedence source).
"""

import argparse
from typing import Any, Dict, List, Optional

from readme4ai.domain.constants import APP_VERSION, SUPPORTED_LANGUAGES
from readme4ai.infra.logging import get_default_log_path
from readme4ai.utils.i18n import i18n

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the readme4ai CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="readme4ai",
        description=i18n.t("app.description"),
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")

    # --- Target selection ---
    p.add_argument("-f", "--file", dest="target_file", default=None, help=i18n.t("cli.args.file"))
    p.add_argument(
        "-w", "--workspace",
        dest="workspace_dir",
        default=None,
        help=i18n.t("cli.args.workspace"),
    )
    p.add_argument("--readme-name", dest="readme_name", default=None, help=i18n.t("cli.args.readme_name"))

    history = p.add_mutually_exclusive_group()
    history.add_argument("--reset", action="store_true", help=i18n.t("cli.args.reset"))
    history.add_argument("--keep", action="store_true", help=i18n.t("cli.args.keep"))

    # --- Model access ---
    p.add_argument("--api-key", dest="api_key", default=None, help=i18n.t("cli.args.api_key"))
    p.add_argument("--model", dest="model", default=None, help=i18n.t("cli.args.model"))
    p.add_argument(
        "--language",
        dest="language",
        default=None,
        choices=SUPPORTED_LANGUAGES,
        help=i18n.t("cli.args.language"),
    )

    # --- Tree shaping ---
    p.add_argument("--max-depth", dest="max_depth", type=int, default=None, help=i18n.t("cli.args.max_depth"))
    p.add_argument(
        "--max-tree-lines",
        dest="max_tree_lines",
        type=_non_negative_int,
        default=None,
        help=i18n.t("cli.args.max_tree_lines"),
    )
    p.add_argument("--exclude", dest="exclude_patterns", default=None, help=i18n.t("cli.args.exclude"))
    p.add_argument("--tree-only", dest="tree_only", metavar="DIR", default=None, help=i18n.t("cli.args.tree_only"))
    p.add_argument("--print-tree", action="store_true", help=i18n.t("cli.args.print_tree"))

    # --- Runtime ---
    p.add_argument("--dry-run", action="store_true", help=i18n.t("cli.args.dry_run"))
    p.add_argument("--json", dest="json_output", action="store_true", help=i18n.t("cli.args.json"))
    p.add_argument("--dump-config", action="store_true", help=i18n.t("cli.args.dump_config"))
    p.add_argument("--debug", action="store_true", help=i18n.t("cli.args.debug"))
    p.add_argument(
        "--log-file",
        dest="log_file",
        nargs="?",
        const=get_default_log_path(),
        default=None,
        help=argparse.SUPPRESS,
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into explicit setting overrides.

    Unset options map to None so the resolver falls through to the next
    precedence level.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Setting overrides.
    """
    overrides: Dict[str, Any] = {
        "api_key": args.api_key,
        "model": args.model,
        "language": args.language,
        "max_tree_lines": args.max_tree_lines,
        "exclude_patterns": _split_csv(args.exclude_patterns),
    }
    return overrides


def history_choice(args: argparse.Namespace) -> Optional[bool]:
    """
    Decode the README history flags.

    Returns:
        Optional[bool]: True to keep the previous README as reference,
                        False to reset it, None when the user did not say.
    """
    if args.keep:
        return True
    if args.reset:
        return False
    return None

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """Convert a comma-separated string into a list of trimmed strings."""
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]


def _non_negative_int(value: str) -> int:
    """argparse type for counts where 0 means 'no limit'."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{value}'")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number
