from __future__ import annotations

import fnmatch
import logging
from collections import Counter
from typing import Iterable, List, Sequence

from rich.console import Console

from .config import Config
from .errors import ProjectReadError
from .fs_scan import find_project_files
from .model import Metadata, Plugin, PluginCount, ProjectReport, ScanReport
from .reader import read_project

logger = logging.getLogger(__name__)


ARCHITECTURES_64_BIT = frozenset({"WIN64", "MAC64 LE"})

HEADING_STYLE = "white on red"
PROJECT_STYLE = "blue"


def is_64_bit(metadata: Metadata) -> bool:
	return metadata.architecture in ARCHITECTURES_64_BIT


def is_reported(metadata: Metadata, config: Config) -> bool:
	if is_64_bit(metadata):
		return config.projects.report_64_bit
	return config.projects.report_32_bit


def sort_plugins(plugins: Iterable[Plugin]) -> List[Plugin]:
	return sorted(plugins, key=lambda p: (p.name, p.guid))


def filter_plugins(plugins: Iterable[Plugin], config: Config) -> List[Plugin]:
	guid_ignores = set(config.plugins.guid_ignores)
	name_ignores = set(config.plugins.name_ignores)
	return sort_plugins(
		p for p in plugins if p.guid not in guid_ignores and p.name not in name_ignores
	)


def matches_filters(plugins: Sequence[Plugin], patterns: Sequence[str]) -> bool:
	if not patterns:
		return True
	return any(fnmatch.fnmatchcase(p.name, pattern) for p in plugins for pattern in patterns)


def read_project_file(path: str, config: Config) -> ProjectReport:
	"""Read one project file, turning read failures into an error report."""
	try:
		with open(path, "rb") as fh:
			data = fh.read()
	except OSError as e:
		logger.error("Unable to read %s: %s", path, e)
		return ProjectReport(path=path, error=f"Unable to read file: {e}")

	try:
		project = read_project(data)
	except ProjectReadError as e:
		logger.error("Invalid project file %s: %s", path, e)
		return ProjectReport(path=path, error=str(e))

	return ProjectReport(
		path=path,
		metadata=project.metadata,
		plugins=filter_plugins(project.plugins, config),
	)


def _to_counts(counter: Counter) -> List[PluginCount]:
	plugins = sort_plugins(counter)
	return [PluginCount(guid=p.guid, name=p.name, count=counter[p]) for p in plugins]


def scan_projects(
	roots: Iterable[str],
	config: Config,
	patterns: Sequence[str] = (),
) -> ScanReport:
	"""Read every project under ``roots`` and tally plugin usage across them."""
	projects: List[ProjectReport] = []
	counts_32: Counter = Counter()
	counts_64: Counter = Counter()
	counts_all: Counter = Counter()

	for path in find_project_files(roots, config.path_ignore_patterns):
		report = read_project_file(path, config)
		if report.metadata is None:
			projects.append(report)
			continue

		if not is_reported(report.metadata, config):
			logger.debug("Skipping %s (%s)", path, report.metadata.architecture)
			continue

		if not matches_filters(report.plugins, patterns):
			logger.debug("Skipping %s as no plugin matches the filters", path)
			continue

		projects.append(report)
		tally = counts_64 if is_64_bit(report.metadata) else counts_32
		tally.update(report.plugins)
		counts_all.update(report.plugins)

	return ScanReport(
		projects=projects,
		plugins_32_bit=_to_counts(counts_32),
		plugins_64_bit=_to_counts(counts_64),
		plugins_all=_to_counts(counts_all),
	)


def _print_heading(console: Console, text: str) -> None:
	console.print()
	console.print(text, style=HEADING_STYLE, markup=False, highlight=False)
	console.print()


def _print_counts(console: Console, title: str, counts: List[PluginCount]) -> None:
	if not counts:
		return
	_print_heading(console, f"Summary: {title}")
	for entry in counts:
		console.print(
			f"    > {entry.guid} : {entry.name} ({entry.count})", markup=False, highlight=False
		)


def render_report(report: ScanReport, console: Console, config: Config) -> None:
	for project in report.projects:
		_print_heading(console, f"Path: {project.path}")
		if project.metadata is None:
			console.print(f"Invalid project file: {project.error}", style="bold red", markup=False)
			continue

		metadata = project.metadata
		console.print(
			f"{metadata.application} {metadata.version} ({metadata.architecture})",
			style=PROJECT_STYLE,
			markup=False,
			highlight=False,
		)
		if project.plugins:
			console.print()
			for plugin in project.plugins:
				console.print(f"    > {plugin.guid} : {plugin.name}", markup=False, highlight=False)

	_print_counts(console, "Plugins Used In 32-bit Projects", report.plugins_32_bit)
	_print_counts(console, "Plugins Used In 64-bit Projects", report.plugins_64_bit)
	# Identical to one of the above unless both architectures are reported.
	if config.projects.report_32_bit and config.projects.report_64_bit:
		_print_counts(console, "Plugins Used In All Projects", report.plugins_all)
	console.print()
