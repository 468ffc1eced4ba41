"""HTTP API for the in-memory file explorer.

A small request/response protocol over one shared session, so the tree can
be driven programmatically instead of through the interactive shell.

Usage:
    python -m uvicorn explorer.api:app --host 127.0.0.1 --port 8000

Or via CLI:
    python -m explorer.cli serve
"""

import logging
from typing import List, Optional

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .filesystem import (
    Entry,
    EntryKind,
    ExplorerSession,
    FileSystemError,
    NotFound,
    NameCollision,
    CyclicMove,
    CannotDeleteRoot,
    CannotDeleteCurrent,
    CannotDeleteAncestorOfCurrent,
    SearchFactory,
)
from .render import tree_to_rows
from .settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.logging.level, logging.INFO),
    format=settings.logging.format,
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="File Explorer API",
    description="In-memory hierarchical file system",
    version="1.0.0",
)

_session: Optional[ExplorerSession] = None


def get_session() -> ExplorerSession:
    """Lazy-create the shared session."""
    global _session
    if _session is None:
        _session = ExplorerSession()
    return _session


def reset_session(session: Optional[ExplorerSession] = None) -> ExplorerSession:
    """Replace the shared session (fresh one if None)."""
    global _session
    _session = session if session is not None else ExplorerSession()
    return _session


# ============================================================================
# Pydantic Models
# ============================================================================

class EntryModel(BaseModel):
    """One file or folder."""
    id: int
    name: str
    kind: EntryKind
    path: str
    children: Optional[int] = Field(default=None, description="Number of children (folders only)")


class CreateEntryRequest(BaseModel):
    """Create a file or folder."""
    name: str
    kind: EntryKind = EntryKind.FILE
    parent: Optional[str] = Field(default=None, description="Parent folder path (default: current)")


class MoveRequest(BaseModel):
    """Move source into the destination folder."""
    source: str
    destination: str


class ChangeDirectoryRequest(BaseModel):
    """'..', '/', a child folder name or a path."""
    target: str


class LocationResponse(BaseModel):
    path: str
    entry: EntryModel


class ListingResponse(BaseModel):
    path: str
    entries: List[EntryModel]


class DeleteResponse(BaseModel):
    path: str
    released: int


class TreeNodeModel(BaseModel):
    """One node of a flattened tree; parent and depth give the nesting."""
    id: int
    name: str
    kind: EntryKind
    path: str
    parent: Optional[int] = None
    depth: int


class TreeResponse(BaseModel):
    path: str
    nodes: List[TreeNodeModel]


class SearchHitModel(BaseModel):
    path: str
    kind: EntryKind
    id: int
    depth: int


class SearchResponse(BaseModel):
    query: str
    strategy: str
    hits: List[SearchHitModel]


def _entry_model(session: ExplorerSession, entry: Entry) -> EntryModel:
    return EntryModel(
        id=entry.id,
        name=entry.name,
        kind=entry.kind,
        path=session.tree.full_path(entry),
        children=session.tree.count_children(entry) if entry.is_folder else None,
    )


# ============================================================================
# Error mapping
# ============================================================================

_CONFLICTS = (
    NameCollision,
    CyclicMove,
    CannotDeleteRoot,
    CannotDeleteCurrent,
    CannotDeleteAncestorOfCurrent,
)


@app.exception_handler(FileSystemError)
async def filesystem_error_handler(request: Request, exc: FileSystemError):
    if isinstance(exc, NotFound):
        status_code = 404
    elif isinstance(exc, _CONFLICTS):
        status_code = 409
    else:
        status_code = 400
    logger.warning(f"{request.method} {request.url.path} rejected: {exc.kind}: {exc.message}")
    return JSONResponse(status_code=status_code, content=exc.to_dict())


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    return JSONResponse(status_code=400, content={"error": "ValueError", "detail": str(exc)})


# ============================================================================
# API Endpoints
# ============================================================================

@app.get("/")
def root():
    """API Root - basic information."""
    return {
        "name": "File Explorer API",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
        "strategies": SearchFactory.list_strategies(),
    }


@app.get("/health")
def health():
    """Health-Check Endpoint."""
    session = get_session()
    return {
        "status": "ok",
        "entries": len(session.tree),
        "current": session.pwd(),
    }


@app.get("/tree", response_model=TreeResponse)
def get_tree(
    path: Optional[str] = None,
    depth: Optional[int] = Query(default=None, ge=0, description="Levels below path to include"),
):
    """Pre-order node list of the tree (or of the subtree at path)."""
    session = get_session()
    with session.lock:
        start = None if path is None else session.resolve(path)
        rows = tree_to_rows(session.tree, start, max_depth=depth)
        return TreeResponse(path=rows[0]["path"], nodes=[TreeNodeModel(**row) for row in rows])


@app.get("/pwd", response_model=LocationResponse)
def pwd():
    session = get_session()
    with session.lock:
        return LocationResponse(path=session.pwd(), entry=_entry_model(session, session.current))


@app.post("/cd", response_model=LocationResponse)
def change_directory(request: ChangeDirectoryRequest):
    session = get_session()
    with session.lock:
        entry = session.cd(request.target)
        return LocationResponse(path=session.pwd(), entry=_entry_model(session, entry))


@app.get("/entries", response_model=ListingResponse)
def list_entries(path: Optional[str] = None):
    """List a folder (default: current directory)."""
    session = get_session()
    with session.lock:
        folder = session.current if path is None else session.resolve(path)
        entries = [_entry_model(session, child) for child in session.tree.children(folder)]
        return ListingResponse(path=session.tree.full_path(folder), entries=entries)


@app.post("/entries", response_model=EntryModel, status_code=201)
def create_entry(request: CreateEntryRequest):
    session = get_session()
    with session.lock:
        entry = session.create(request.name, request.kind, parent=request.parent)
        return _entry_model(session, entry)


@app.delete("/entries", response_model=DeleteResponse)
def delete_entry(path: str):
    session = get_session()
    with session.lock:
        entry = session.resolve(path)
        full_path = session.tree.full_path(entry)
        released = session.remove_entry(entry)
        return DeleteResponse(path=full_path, released=len(released))


@app.post("/move", response_model=EntryModel)
def move_entry(request: MoveRequest):
    session = get_session()
    with session.lock:
        entry = session.move(request.source, request.destination)
        return _entry_model(session, entry)


@app.get("/search", response_model=SearchResponse)
def search(
    q: str = Query(..., description="Substring to look for"),
    strategy: Optional[str] = Query(default=None, description="dfs or bfs"),
    start: Optional[str] = Query(default=None, description="Path to search from"),
):
    session = get_session()
    with session.lock:
        strategy_name = strategy or session.search_strategy
        hits = session.search(q, strategy=strategy_name, start=start)
        return SearchResponse(
            query=q,
            strategy=strategy_name,
            hits=[
                SearchHitModel(path=hit.path, kind=hit.kind, id=hit.entry_id, depth=hit.depth)
                for hit in hits
            ],
        )


def run_server(host: Optional[str] = None, port: Optional[int] = None, reload: bool = False):
    """Start the API server."""
    import uvicorn
    host = host or settings.api.host
    port = port or settings.api.port
    logger.info(f"Starting File Explorer API on {host}:{port}")
    uvicorn.run("explorer.api:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    run_server()
