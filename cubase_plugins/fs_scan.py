from __future__ import annotations

import fnmatch
import logging
import os
from typing import Iterable, List, Sequence

logger = logging.getLogger(__name__)


PROJECT_EXTENSION = ".cpr"


def is_project_file(filename: str) -> bool:
	_, ext = os.path.splitext(filename)
	return ext.lower() == PROJECT_EXTENSION


def is_ignored(path: str, ignore_patterns: Sequence[str]) -> bool:
	return any(fnmatch.fnmatchcase(path, pattern) for pattern in ignore_patterns)


def find_project_files(roots: Iterable[str], ignore_patterns: Sequence[str] = ()) -> List[str]:
	"""Recursively collect Cubase project files beneath each root directory."""
	found: List[str] = []
	for root in roots:
		root = os.path.abspath(root)
		if not os.path.isdir(root):
			logger.warning("Skipping %s as it is not a directory", root)
			continue

		paths: List[str] = []
		for dirpath, dirnames, filenames in os.walk(root):
			dirnames.sort()
			for filename in filenames:
				if not is_project_file(filename):
					continue
				path = os.path.join(dirpath, filename)
				if is_ignored(path, ignore_patterns):
					logger.debug("Ignoring %s", path)
					continue
				paths.append(path)

		logger.info("Found %d project(s) under %s", len(paths), root)
		found.extend(sorted(paths))
	return found
