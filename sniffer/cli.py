"""CLI entrypoints for sniffer commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .auditor import TemplateAuditor
from .config import ConfigError, load_config
from .logging import configure_logging
from .rendering import ReportRenderer


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sniffer",
        description="Audit a theme's template hierarchy without touching any files.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    audit_parser = subparsers.add_parser(
        "audit",
        help="Report core coverage, overrides, unused and missing templates.",
    )
    _add_verbose_option(audit_parser, suppress_default=True)
    audit_parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Active (child) theme directory (defaults to child_root in config, then the current directory).",
    )
    audit_parser.add_argument(
        "--parent",
        default=None,
        help="Parent theme directory; omit for a theme that is not a child theme.",
    )
    audit_parser.add_argument(
        "--config",
        default=None,
        help="Path to .sniffer.yml (defaults to the theme directory).",
    )
    audit_parser.add_argument(
        "--usage",
        default=None,
        help="File listing the template values content uses (.json, .yml or one per line).",
    )
    audit_parser.add_argument(
        "--format",
        choices=("markdown", "json"),
        default=None,
        help="Report format (defaults to output.format in config, then markdown).",
    )
    audit_parser.add_argument(
        "--output",
        default=None,
        help="Write the report to this file instead of stdout.",
    )
    audit_parser.add_argument(
        "--parallel",
        action="store_true",
        help="List the child and parent layers concurrently.",
    )
    audit_parser.add_argument(
        "--log-file",
        default=None,
        help="Also write logs to this file.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Expose audits over HTTP.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to bind.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for sniffer commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = getattr(args, "log_file", None)
    configure_logging(verbose=bool(args.verbose), log_file=Path(log_file) if log_file else None)

    if args.command == "audit":
        _run_audit(parser, args)
    elif args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_audit(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    theme_path = Path(args.path).expanduser().resolve() if args.path else None
    config_location = Path(args.config) if args.config else (theme_path or Path.cwd())
    try:
        config = load_config(config_location)
    except ConfigError as exc:
        parser.exit(1, f"Invalid configuration: {exc}\n")

    output_format = args.format or config.output_format
    auditor = TemplateAuditor(parallel=bool(args.parallel))
    try:
        report = auditor.audit_from_config(
            config,
            child_root=theme_path,
            parent_root=Path(args.parent).expanduser().resolve() if args.parent else None,
            usage_file=Path(args.usage).expanduser() if args.usage else None,
        )
    except ConfigError as exc:
        parser.exit(1, f"sniffer audit failed: {exc}\n")

    rendered = ReportRenderer().render(report, output_format)
    if args.output:
        output_path = Path(args.output)
        output_path.write_text(rendered, encoding="utf-8")
        print(f"Report written to {_relativize(output_path.resolve())}")
    else:
        sys.stdout.write(rendered)


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
