"""FastAPI application exposing the read-only explorer."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from pathlib import Path
from typing import List

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from homescope import __version__
from homescope.config import AppConfig
from homescope.errors import BadRequestError, BrowseError
from homescope.explorer.listing import list_directory
from homescope.explorer.overview import build_overview
from homescope.explorer.reader import read_file
from homescope.explorer.search import SEARCH_MODES, search_tree
from homescope.models import FileView, KeyFileStat, SearchResult, SectionStat, TreeEntry
from homescope.utils.files import resolve_path

LOGGER = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI):
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
    yield


app = FastAPI(title="homescope", version=__version__, lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)


class OverviewResponse(BaseModel):
    sections: List[SectionStat]
    key_files: List[KeyFileStat]


class TreeResponse(BaseModel):
    path: str
    entries: List[TreeEntry]


class SearchResponse(BaseModel):
    results: List[SearchResult]
    total: int


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    return AppConfig()


@app.exception_handler(BrowseError)
async def browse_error_handler(request: Request, exc: BrowseError) -> JSONResponse:
    LOGGER.info("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def _resolve_target(config: AppConfig, rel: str) -> Path:
    # An empty path names the root itself, which is safe by construction.
    if not rel:
        return config.root
    return resolve_path(config.root, rel)


@app.get("/overview")
async def overview(config: AppConfig = Depends(get_config)) -> OverviewResponse:
    sections, key_files = build_overview(config.root)
    return OverviewResponse(sections=sections, key_files=key_files)


@app.get("/tree")
async def tree(
    path: str = "",
    depth: int = 1,
    config: AppConfig = Depends(get_config),
) -> TreeResponse:
    target = _resolve_target(config, path)
    entries = list_directory(target, depth)
    return TreeResponse(path=path or "/", entries=entries)


@app.get("/file")
async def file_view(
    path: str | None = None,
    lines: int = 0,
    config: AppConfig = Depends(get_config),
) -> FileView:
    if not path:
        raise BadRequestError("path required")
    target = resolve_path(config.root, path)
    return read_file(
        target,
        display_path=path,
        tail=max(0, lines),
        max_bytes=config.max_file_bytes,
    )


@app.get("/search")
async def search(
    q: str | None = None,
    mode: str = Query("name", alias="type"),
    config: AppConfig = Depends(get_config),
) -> SearchResponse:
    if not q or not q.strip():
        raise BadRequestError("q required")
    if mode == "file":
        mode = "name"
    if mode not in SEARCH_MODES:
        raise BadRequestError(f"Unknown search type: {mode}")

    results = search_tree(
        config.root,
        q,
        mode,  # type: ignore[arg-type]
        max_results=config.max_results,
        max_file_bytes=config.max_search_file_bytes,
        skip_dirs=config.skip_dirs,
    )
    return SearchResponse(results=results, total=len(results))
