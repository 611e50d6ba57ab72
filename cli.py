from __future__ import annotations

import argparse
import logging
import sys

import uvicorn
from rich.console import Console
from rich.logging import RichHandler

from cubase_plugins.config import resolve_config
from cubase_plugins.errors import ConfigError
from cubase_plugins.summarize import render_report, scan_projects


def setup_logging(verbose: bool) -> None:
	logging.basicConfig(
		level=logging.INFO if verbose else logging.WARNING,
		format="%(message)s",
		handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
	)


def cmd_scan(args: argparse.Namespace) -> int:
	try:
		config = resolve_config(args.config)
	except ConfigError as e:
		logging.getLogger(__name__).error("%s", e)
		return 1

	report = scan_projects(args.paths, config, args.filters)
	if args.json:
		print(report.model_dump_json(indent=2))
	else:
		render_report(report, Console(), config)
	return 1 if report.failed else 0


def cmd_serve(args: argparse.Namespace) -> int:
	uvicorn.run("api:create_app", factory=True, host=args.host, port=args.port, reload=args.reload)
	return 0


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		prog="cubase-project-plugins",
		description="Display the plugins used in your Cubase projects along with the Cubase version they were created with.",
	)
	parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
	sub = parser.add_subparsers(dest="cmd", required=True)

	ps = sub.add_parser("scan", help="Scan directories for projects and report their plugins")
	ps.add_argument("paths", nargs="+", metavar="PROJECT_PATH", help="Directory to search for Cubase projects")
	ps.add_argument("-c", "--config", metavar="PATH", help="Config file path")
	ps.add_argument(
		"-f",
		"--filter",
		dest="filters",
		action="append",
		default=[],
		metavar="PATTERN",
		help="Only show projects using a plugin whose name matches this wildcard pattern",
	)
	ps.add_argument("--json", action="store_true", help="Print the report as JSON")
	ps.set_defaults(func=cmd_scan)

	pv = sub.add_parser("serve", help="Run FastAPI server")
	pv.add_argument("--host", default="127.0.0.1")
	pv.add_argument("--port", type=int, default=8000)
	pv.add_argument("--reload", action="store_true")
	pv.set_defaults(func=cmd_serve)

	return parser


def main(argv: list[str] | None = None) -> int:
	args = build_parser().parse_args(argv)
	setup_logging(args.verbose)
	return args.func(args)


if __name__ == "__main__":
	sys.exit(main())
