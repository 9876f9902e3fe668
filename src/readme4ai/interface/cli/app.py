from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, settings resolution
(arguments, environment, stored settings, interactive prompts), README
generation and result rendering. Interactive prompts are only offered when
stdin is a terminal, so the command stays scriptable.
"""

import argparse
import getpass
import json
import os
import sys
from dataclasses import asdict
from typing import List, Optional

from readme4ai.core.analysis.tree_builder import build_tree
from readme4ai.core.analysis.tree_renderer import render_tree
from readme4ai.core.services.readme_service import (
    GenerationRequest,
    describe_skipped,
    generate_readme,
)
from readme4ai.domain.config import SettingsError, as_line_limit, load_settings, resolve_settings
from readme4ai.domain.constants import AVAILABLE_MODELS, DEFAULT_README_NAME
from readme4ai.domain.generation_models import GenerationOutcome
from readme4ai.infra.fs import normalize_path
from readme4ai.infra.logging import LoggingConfig, configure_logging, get_logger
from readme4ai.interface.cli import args as cli_args
from readme4ai.utils.i18n import i18n

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INVALID = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing and logging bootstrap
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)
    configure_logging(LoggingConfig.for_cli(debug=args.debug, log_file=args.log_file))

    overrides = cli_args.args_to_overrides(args)

    # 2. Tree preview short-circuit (no credentials needed)
    if args.tree_only:
        return _run_tree_only(args.tree_only, overrides.get("exclude_patterns"), args)

    # 3. Settings resolution
    interactive = _is_interactive()
    try:
        settings = resolve_settings(
            overrides,
            ask_api_key=_ask_api_key if interactive else None,
            ask_model=_ask_model if interactive else None,
        )
    except SettingsError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_INVALID

    if args.dump_config:
        print(json.dumps(settings.masked(), ensure_ascii=False, indent=2))
        return EXIT_OK

    # 4. Target validation
    if not args.target_file:
        print(f"ERROR: {i18n.t('cli.errors.no_file')}", file=sys.stderr)
        return EXIT_INVALID
    target_file = normalize_path(args.target_file, os.getcwd())
    if not os.path.isfile(target_file):
        print(f"ERROR: {i18n.t('cli.errors.file_not_found', path=target_file)}", file=sys.stderr)
        return EXIT_INVALID

    keep_previous = cli_args.history_choice(args)
    if keep_previous is None:
        keep_previous = _ask_keep_previous() if interactive else False
        if keep_previous is None:
            print(f"ERROR: {i18n.t('cli.errors.cancelled')}", file=sys.stderr)
            return EXIT_FAILURE

    if not args.json_output:
        print(i18n.t("cli.status.selected", path=target_file))

    request = GenerationRequest(
        target_file=target_file,
        workspace_dir=normalize_path(args.workspace_dir, os.getcwd()),
        settings=settings,
        keep_previous=keep_previous,
        readme_name=args.readme_name or DEFAULT_README_NAME,
        dry_run=bool(args.dry_run),
        max_depth=args.max_depth,
    )

    # 5. Generation
    if not args.json_output and not request.dry_run:
        print(i18n.t("cli.status.creating"), flush=True)
    try:
        outcome = generate_readme(request)
    except KeyboardInterrupt:
        msg = i18n.t("cli.status.interrupted")
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return EXIT_INTERRUPTED
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_INVALID
    except Exception as e:
        msg = i18n.t("cli.errors.unexpected", error=str(e))
        logger.critical(msg, exc_info=True)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_FAILURE

    # 6. Output rendering
    if args.json_output:
        print(json.dumps(asdict(outcome), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(outcome, request.readme_name, print_tree=bool(args.print_tree))

    return EXIT_OK if outcome.ok else EXIT_FAILURE

# -----------------------------------------------------------------------------
# SUB-COMMANDS
# -----------------------------------------------------------------------------

def _run_tree_only(
        directory: str,
        exclude: Optional[List[str]],
        args: argparse.Namespace,
) -> int:
    """Print the ASCII tree of a folder and the entries that were skipped."""
    if exclude is None:
        exclude = load_settings().get("exclude_patterns") or []

    try:
        result = build_tree(
            normalize_path(directory, os.getcwd()),
            exclude_patterns=exclude,
            max_depth=args.max_depth,
        )
        tree_text = render_tree(result.root, max_lines=as_line_limit(args.max_tree_lines))
    except (FileNotFoundError, NotADirectoryError):
        print(f"ERROR: {i18n.t('cli.errors.dir_not_found', path=directory)}", file=sys.stderr)
        return EXIT_INVALID
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_INVALID

    if args.json_output:
        payload = {"tree": tree_text, "skipped": [asdict(s) for s in result.skipped]}
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return EXIT_OK

    print(tree_text)
    if result.skipped:
        print(i18n.t("cli.status.skipped", count=len(result.skipped)), file=sys.stderr)
        for s in result.skipped:
            print(f"  - {s.path}: {s.reason}", file=sys.stderr)
    return EXIT_OK

# -----------------------------------------------------------------------------
# INTERACTIVE PROMPTS
# -----------------------------------------------------------------------------

def _is_interactive() -> bool:
    return bool(getattr(sys.stdin, "isatty", None) and sys.stdin.isatty())


def _ask_api_key() -> Optional[str]:
    """Ask for the API key without echoing it."""
    try:
        return getpass.getpass(i18n.t("cli.prompts.api_key"))
    except (EOFError, KeyboardInterrupt):
        return None


def _ask_model(models: List[str]) -> Optional[str]:
    """Numbered quick-pick among the available models."""
    print(i18n.t("cli.prompts.model_title"))
    for idx, name in enumerate(models, start=1):
        print(f"  {idx}. {name} - {AVAILABLE_MODELS.get(name, '')}")
    try:
        answer = input(i18n.t("cli.prompts.model_choice", count=len(models))).strip()
    except (EOFError, KeyboardInterrupt):
        return None

    if answer.isdigit() and 1 <= int(answer) <= len(models):
        return models[int(answer) - 1]
    return answer if answer in models else None


def _ask_keep_previous() -> Optional[bool]:
    """
    Ask whether the existing README is reset.

    Returns:
        Optional[bool]: True to keep it as reference, False to reset,
                        None when the user cancels.
    """
    try:
        answer = input(i18n.t("cli.prompts.reset")).strip().lower()
    except (EOFError, KeyboardInterrupt):
        return None
    if answer in ("y", "yes"):
        return False
    if answer in ("n", "no"):
        return True
    return None

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(outcome: GenerationOutcome, readme_name: str, print_tree: bool) -> None:
    """
    Format and print the outcome of a run on the terminal.

    Args:
        outcome: Generation report.
        readme_name: File name used for the README.
        print_tree: Echo the folder tree sent to the model.
    """
    if print_tree and outcome.tree_text:
        print(outcome.tree_text)

    if outcome.skipped:
        print(i18n.t("cli.status.skipped", count=len(outcome.skipped)), file=sys.stderr)
        for line in describe_skipped(outcome):
            print(f"  - {line}", file=sys.stderr)

    if not outcome.ok:
        print(f"ERROR: {outcome.error}", file=sys.stderr)
        return

    if outcome.dry_run:
        print(outcome.content)
        print(i18n.t("cli.status.dry_run", tokens=outcome.prompt_tokens))
        return

    print(i18n.t("cli.status.success", name=readme_name))
    print(f"  - path: {outcome.readme_path}")
    print(f"  - prompt tokens: {outcome.prompt_tokens:,}")

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
