"""
Library Manager — entry point.

Usage:
    python -m libmanager serve [--port PORT] [--host HOST] [--libs FILE]
    python -m libmanager libraries [--libs FILE]
    python -m libmanager export IN OUT [--lib CELL=LIBRARY ...]
    python -m libmanager export IN --dry-run [--lib CELL=LIBRARY ...]
    python -m libmanager relink IN OUT [--libs FILE]
    python -m libmanager prune IN OUT
"""

import sys

from libmanager.errors import LibraryManagerError
from libmanager.logging_config import setup_logging

USAGE = __doc__.split("Usage:", 1)[1]
FLAGS = {"--dry-run"}


def _option(args: list[str], name: str, default: str | None = None) -> str | None:
    for i, a in enumerate(args):
        if a == name and i + 1 < len(args):
            return args[i + 1]
    return default


def _options(args: list[str], name: str) -> list[str]:
    return [args[i + 1] for i, a in enumerate(args) if a == name and i + 1 < len(args)]


def _positionals(args: list[str]) -> list[str]:
    out = []
    skip = False
    for a in args:
        if skip:
            skip = False
        elif a in FLAGS:
            continue
        elif a.startswith("--"):
            skip = True
        else:
            out.append(a)
    return out


def _library_names(pairs: list[str]) -> dict[str, str]:
    names = {}
    for p in pairs:
        cell, sep, lib = p.partition("=")
        if not sep or not cell or not lib:
            raise LibraryManagerError(f"--lib expects CELL=LIBRARY, got '{p}'")
        names[cell] = lib
    return names


def _plan(session, pos: list[str], args: list[str]) -> int:
    from libmanager.export import FilteredExporter

    if len(pos) != 1:
        print("export --dry-run expects one layout file")
        return 1
    layout = session.open(pos[0])
    plan = FilteredExporter(layout, _library_names(_options(args, "--lib"))).plan()
    for r in plan.renames:
        print(f"{r.old_name} -> {r.new_name}")
    for s in plan.skipped:
        print(f"skip {s.name}: {s.reason}")
    print(f"Would exclude {len(plan.excluded)} cell(s), keep {len(plan.selected)}.")
    return 0


def _run(cmd: str, args: list[str]) -> int:
    from libmanager.session import LayoutSession

    session = LayoutSession()
    pos = _positionals(args)

    if cmd == "libraries":
        session.load_libraries(_option(args, "--libs"))
        for lib in session.registry:
            print(f"{lib.name}: {lib.path} ({len(lib.cell_names())} cells)")
        return 0

    if cmd == "export" and "--dry-run" in args:
        return _plan(session, pos, args)

    if len(pos) != 2:
        print(f"{cmd} expects IN and OUT layout files")
        return 1
    src, dst = pos

    if cmd == "export":
        session.open(src)
        result = session.export(dst, _library_names(_options(args, "--lib")))
        print(f"Excluded {len(result.plan.excluded)} cell(s), renamed {len(result.renamed)}.")
    elif cmd == "relink":
        session.load_libraries(_option(args, "--libs"))
        result = session.open_and_relink(src)
        print(result.message)
        session.save(dst)
    elif cmd == "prune":
        session.open(src)
        result = session.prune()
        print(f"{result.message} ({result.count} cell(s))")
        session.save(dst)
    else:
        print(f"Unknown command: {cmd}")
        print("Usage:" + USAGE)
        return 1
    return 0


def main():
    args = sys.argv[1:]
    cmd = args[0] if args else "serve"
    setup_logging()

    if cmd == "serve":
        port = int(_option(args, "--port", "8000"))
        host = _option(args, "--host", "127.0.0.1")

        from libmanager.web.server import main as serve
        serve(host=host, port=port, libs=_option(args, "--libs"))
        return

    try:
        code = _run(cmd, args[1:])
    except LibraryManagerError as exc:
        print(f"{exc.title}: {exc}")
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
