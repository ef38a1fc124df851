"""
FastAPI web server — library loading, filtered export and relink over HTTP.

One LayoutSession is shared by all requests; a lock makes requests run one
at a time, the way a desktop host runs one menu action at a time.
"""

from __future__ import annotations

import threading

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from libmanager import __version__
from libmanager.errors import (
    ConfigError, LibraryManagerError, NoActiveLayoutError, WriteError,
)
from libmanager.export import export_to_dict
from libmanager.layout import layout_summary
from libmanager.relink import prune_to_dict, relink_to_dict
from libmanager.session import LayoutSession

# ── App ────────────────────────────────────────────────────────────

app = FastAPI(title="Library Manager")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Session state (persists across requests) ───────────────────────

_session = LayoutSession()
_lock = threading.Lock()


def get_session() -> LayoutSession:
    return _session


# ── Models ─────────────────────────────────────────────────────────

class LoadLibrariesRequest(BaseModel):
    path: str | None = None


class OpenLayoutRequest(BaseModel):
    path: str


class ExportRequest(BaseModel):
    path: str
    library_names: dict[str, str] = {}


class SaveRequest(BaseModel):
    path: str | None = None


# ── Helpers ────────────────────────────────────────────────────────

def _http_error(exc: LibraryManagerError) -> HTTPException:
    if isinstance(exc, NoActiveLayoutError):
        status = 409
    elif isinstance(exc, WriteError):
        status = 500
    else:
        status = 400
    return HTTPException(status, {"title": exc.title, "message": str(exc)})


def _messages_since(start: int) -> list[dict]:
    return [
        {"level": m.level, "title": m.title, "text": m.text}
        for m in _session.messages[start:]
    ]


# ── Routes ─────────────────────────────────────────────────────────

@app.get("/")
def index():
    return {"service": "libmanager", "version": __version__}


@app.post("/api/reset")
def reset_session():
    """Close the layout and clear messages. Registered libraries stay."""
    with _lock:
        _session.close()
        _session.messages.clear()
    return {"status": "ok"}


@app.get("/api/messages")
def get_messages():
    with _lock:
        return {"messages": _messages_since(0)}


@app.get("/api/libraries")
def list_libraries():
    with _lock:
        return {
            "libraries": [
                {
                    "name": lib.name,
                    "path": str(lib.path) if lib.path else None,
                    "description": lib.description,
                    "cells": lib.cell_names(),
                }
                for lib in _session.registry
            ]
        }


@app.post("/api/libraries/load")
def load_libraries(req: LoadLibrariesRequest):
    with _lock:
        start = len(_session.messages)
        try:
            result = _session.load_libraries(req.path)
        except ConfigError as exc:
            raise _http_error(exc)
        return {
            "registered": result.registered,
            "count": result.count,
            "issues": [str(i) for i in result.issues],
            "messages": _messages_since(start),
        }


@app.post("/api/layout/open")
def open_layout(req: OpenLayoutRequest):
    with _lock:
        try:
            layout = _session.open(req.path)
        except LibraryManagerError as exc:
            raise _http_error(exc)
        return {"path": req.path, "layout": layout_summary(layout)}


@app.get("/api/layout")
def get_layout():
    with _lock:
        if _session.layout is None:
            raise _http_error(NoActiveLayoutError())
        return {
            "path": str(_session.path) if _session.path else None,
            "layout": layout_summary(_session.layout),
        }


@app.post("/api/layout/export")
def export_layout(req: ExportRequest):
    with _lock:
        start = len(_session.messages)
        try:
            result = _session.export(req.path, req.library_names)
        except LibraryManagerError as exc:
            raise _http_error(exc)
        return {**export_to_dict(result), "messages": _messages_since(start)}


@app.post("/api/layout/relink")
def relink_layout():
    with _lock:
        start = len(_session.messages)
        try:
            result = _session.relink()
        except LibraryManagerError as exc:
            raise _http_error(exc)
        return {
            **relink_to_dict(result),
            "layout": layout_summary(_session.layout),
            "messages": _messages_since(start),
        }


@app.post("/api/layout/prune")
def prune_layout():
    with _lock:
        try:
            result = _session.prune()
        except LibraryManagerError as exc:
            raise _http_error(exc)
        return {**prune_to_dict(result), "layout": layout_summary(_session.layout)}


@app.post("/api/layout/save")
def save_layout(req: SaveRequest):
    with _lock:
        try:
            path = _session.save(req.path)
        except LibraryManagerError as exc:
            raise _http_error(exc)
        return {"status": "ok", "path": str(path)}


# ── Entry point ────────────────────────────────────────────────────

def main(host: str = "127.0.0.1", port: int = 8000, libs: str | None = None):
    import uvicorn

    if libs:
        _session.load_libraries(libs)
    uvicorn.run("libmanager.web.server:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    main()
