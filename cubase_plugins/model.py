from __future__ import annotations

from typing import FrozenSet, List, Optional
from pydantic import BaseModel, ConfigDict, field_serializer


class Metadata(BaseModel):
	"""Application details recorded when the project was created."""

	model_config = ConfigDict(frozen=True)

	application: str
	version: str
	release_date: str
	architecture: str


class Plugin(BaseModel):
	model_config = ConfigDict(frozen=True)

	guid: str
	name: str


class Project(BaseModel):
	model_config = ConfigDict(frozen=True)

	metadata: Metadata
	plugins: FrozenSet[Plugin] = frozenset()

	@field_serializer("plugins")
	def _sorted_plugins(self, plugins: FrozenSet[Plugin]) -> List[Plugin]:
		return sorted(plugins, key=lambda p: (p.name, p.guid))


class ProjectReport(BaseModel):
	path: str
	metadata: Optional[Metadata] = None
	plugins: List[Plugin] = []
	error: Optional[str] = None


class PluginCount(BaseModel):
	guid: str
	name: str
	count: int


class ScanReport(BaseModel):
	projects: List[ProjectReport] = []
	plugins_32_bit: List[PluginCount] = []
	plugins_64_bit: List[PluginCount] = []
	plugins_all: List[PluginCount] = []

	@property
	def failed(self) -> List[ProjectReport]:
		return [p for p in self.projects if p.error is not None]
