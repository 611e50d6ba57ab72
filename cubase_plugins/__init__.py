"""Reports the plugins used in Cubase projects along with the Cubase version that created them.

Modules:
- reader.py: Binary scanner extracting metadata and plugins from *.cpr bytes.
- model.py: Data structures for projects, plugins and scan reports.
- errors.py: Failure reasons raised while reading projects or config.
- fs_scan.py: Recursive project file discovery.
- config.py: TOML configuration of ignores and reported architectures.
- summarize.py: Filtering, cross-project plugin counts and console output.
"""

__all__ = [
	"reader",
	"model",
	"errors",
	"fs_scan",
	"config",
	"summarize",
]
