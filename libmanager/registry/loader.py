"""Library map loader — reads libs.json and registers each library.

The map is a JSON object of ``library name -> layout file path``::

    {"analog": "libs/analog.gds", "io": "libs/io_ring.oas"}

Relative paths are resolved against the map file's folder.  Entries with an
empty name or a missing file are skipped (issue recorded); everything else is
read into a new library and registered.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from libmanager.config import RULES
from libmanager.errors import ConfigError, InvalidNameError

from .models import LoadIssue, LoadResult
from .registry import LibraryRegistry

log = logging.getLogger(__name__)


def resolve_map_path(path: Path | str | None = None) -> Path:
    """Pick the library map: explicit path, then $LIBMANAGER_LIBS, then ./libs.json."""
    if path:
        return Path(path)
    env = os.environ.get(RULES.map_env_var)
    if env:
        return Path(env)
    return RULES.default_map_path


def read_library_map(path: Path | str) -> dict[str, str]:
    """Read and check a library map file.

    Raises ConfigError if the file is missing, is not JSON, or is not a
    non-empty object.  Values are returned as strings, resolved against the
    map file's folder.
    """
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"libs.json not found at {p}")
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {p}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read {p}: {exc}") from exc

    if not isinstance(raw, dict) or not raw:
        raise ConfigError(
            f"{p} must contain a non-empty object mapping library names to layout paths")

    base = p.resolve().parent
    mapping: dict[str, str] = {}
    for name, lib_path in raw.items():
        if not isinstance(lib_path, str):
            mapping[name] = "" if lib_path is None else str(lib_path)
            continue
        lp = Path(lib_path).expanduser()
        mapping[name] = str(lp if lp.is_absolute() else base / lp)
    return mapping


def load_libraries(mapping: dict[str, str], registry: LibraryRegistry) -> LoadResult:
    """Register every valid ``name -> path`` entry of *mapping* in *registry*."""
    result = LoadResult()

    for name, lib_path in mapping.items():
        if name is None or not str(name).strip():
            log.warning("Skipping entry with missing or empty library name for path: %r", lib_path)
            result.issues.append(LoadIssue("", str(lib_path), "Missing or empty library name"))
            continue

        if not lib_path or not Path(lib_path).exists():
            log.warning("File for library '%s' not found: %r", name, lib_path)
            result.issues.append(LoadIssue(name, str(lib_path), "File not found"))
            continue

        try:
            registry.register(name, path=lib_path)
        except InvalidNameError as exc:
            log.warning("Skipping library '%s': %s", name, exc.reason)
            result.issues.append(LoadIssue(name, str(lib_path), exc.reason))
            continue
        except RuntimeError as exc:
            # KLayout reader errors surface as RuntimeError
            log.warning("Cannot read library '%s' from %s: %s", name, lib_path, exc)
            result.issues.append(LoadIssue(name, str(lib_path), f"Read error: {exc}"))
            continue

        log.info("Registered '%s' -> %s", name, lib_path)
        result.registered.append(name)

    return result


def load_library_map(path: Path | str | None, registry: LibraryRegistry) -> LoadResult:
    """Read the library map at *path* (see resolve_map_path) and register it."""
    mapping = read_library_map(resolve_map_path(path))
    return load_libraries(mapping, registry)
