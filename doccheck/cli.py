"""
Command Line Interface
======================
    doccheck init   — scan the project and write a documentation skeleton
    doccheck check  — validate the documentation file against the project
    doccheck serve  — start the HTTP API (and web app, if built)

Exit codes:
    check → 1 if at least one error-severity finding exists, else 0.
            Warnings and infos never change the exit code.
    any   → 1 on a bad invocation (missing file, unreadable project, refusing
            to overwrite).
"""
import argparse
import logging
import os
import sys
from typing import Optional

from doccheck.core.config import DEFAULT_HOST, DEFAULT_PORT, DOC_FILENAME, LOG_DIR
from doccheck.core.exceptions import ProjectPathError
from doccheck.core.output_formatter import findings_to_json, format_report
from doccheck.generator.doc_generator import generate_skeleton
from doccheck.scanner.project_scanner import scan
from doccheck.services.config_store import get_profile, load_config, merge_with_defaults
from doccheck.utils.logging_config import setup_logging
from doccheck.validator.drift_validator import has_errors, validate

logger = logging.getLogger(__name__)

_VERBOSITY = {0: logging.WARNING, 1: logging.INFO}


def _error(message: str) -> int:
    print(f"Error: {message}", file=sys.stderr)
    return 1


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------
def init_command(output: str, project: str = ".", force: bool = False,
                 profile: Optional[str] = None) -> int:
    if os.path.exists(output) and not force:
        return _error(f"{output} already exists. Use --force to overwrite.")

    print("Scanning project...")
    try:
        info = scan(project)
    except ProjectPathError as e:
        return _error(str(e))

    config = load_config()
    if profile and get_profile(config, profile) is None:
        logger.warning("Profile '%s' not found; using global defaults only", profile)
    answers = merge_with_defaults(config, profile)

    print(f"Generating {os.path.basename(output)}...")
    with open(output, "w", encoding="utf-8") as f:
        f.write(generate_skeleton(info, answers))
    print(f"Created {output}")
    return 0


# ---------------------------------------------------------------------------
# check
# ---------------------------------------------------------------------------
def check_command(file: str, project: str = ".", as_json: bool = False) -> int:
    if not os.path.isfile(file):
        return _error(f"{file} not found. Run 'doccheck init' first.")

    with open(file, "r", encoding="utf-8", errors="replace") as f:
        content = f.read()

    try:
        info = scan(project)
    except ProjectPathError as e:
        return _error(str(e))

    findings = validate(content, info)
    print(findings_to_json(findings) if as_json else format_report(findings))
    return 1 if has_errors(findings) else 0


# ---------------------------------------------------------------------------
# serve
# ---------------------------------------------------------------------------
def serve_command(project: str = ".", host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> int:
    import uvicorn

    root = os.path.abspath(project)
    if not os.path.isdir(root):
        return _error(f"Project path does not exist or is not a directory: {root}")

    # Read by the API on every request
    os.environ["DOCCHECK_PROJECT_PATH"] = root
    print(f"Starting doccheck server for: {root}")
    print(f"API server running at http://{host}:{port}")
    uvicorn.run("main:app", host=host, port=port, log_level="info")
    return 0


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="doccheck",
        description=f"Generate and validate living {DOC_FILENAME} documentation",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase log output (-v info, -vv debug)")
    parser.add_argument("-C", "--project", default=".",
                        help="Project root to scan (default: current directory)")
    sub = parser.add_subparsers(dest="command", required=True)

    init_p = sub.add_parser("init", help=f"Scan project and generate initial {DOC_FILENAME}")
    init_p.add_argument("-o", "--output", default=f"./{DOC_FILENAME}",
                        help=f"Output path (default: ./{DOC_FILENAME})")
    init_p.add_argument("--force", action="store_true", help="Overwrite an existing file")
    init_p.add_argument("--profile", default=None,
                        help="Profile whose default answers fill the prose sections")

    check_p = sub.add_parser("check", help=f"Validate {DOC_FILENAME} against current project state")
    check_p.add_argument("-f", "--file", default=f"./{DOC_FILENAME}",
                         help=f"Path to the documentation file (default: ./{DOC_FILENAME})")
    check_p.add_argument("--json", action="store_true", help="Output results as JSON")

    serve_p = sub.add_parser("serve", help="Start the web interface / HTTP API")
    serve_p.add_argument("-p", "--port", type=int, default=DEFAULT_PORT,
                         help=f"API server port (default: {DEFAULT_PORT})")
    serve_p.add_argument("--host", default=DEFAULT_HOST,
                         help=f"Bind address (default: {DEFAULT_HOST})")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=_VERBOSITY.get(args.verbose, logging.DEBUG), log_dir=LOG_DIR)

    if args.command == "init":
        return init_command(args.output, args.project, args.force, args.profile)
    if args.command == "check":
        return check_command(args.file, args.project, args.json)
    return serve_command(args.project, args.host, args.port)


if __name__ == "__main__":
    raise SystemExit(main())
