from __future__ import annotations

import os
from typing import List

from fastapi import FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from cubase_plugins.config import Config
from cubase_plugins.errors import ProjectReadError
from cubase_plugins.model import Project, ScanReport
from cubase_plugins.reader import read_project
from cubase_plugins.summarize import scan_projects


app = FastAPI(title="Cubase Project Plugins")


class ScanRequest(BaseModel):
	project_paths: List[str]
	filters: List[str] = []
	config: Config = Config()


@app.post("/projects/read", response_model=Project)
async def read(request: Request) -> Project:
	data = await request.body()
	try:
		return await run_in_threadpool(read_project, data)
	except ProjectReadError as e:
		raise HTTPException(status_code=422, detail={"reason": e.kind.value, "message": e.message})


@app.post("/scan", response_model=ScanReport)
def scan(req: ScanRequest) -> ScanReport:
	for path in req.project_paths:
		if not os.path.isdir(path):
			raise HTTPException(status_code=400, detail=f"Invalid project path: {path}")
	return scan_projects(req.project_paths, req.config, req.filters)


def create_app() -> FastAPI:
	return app
