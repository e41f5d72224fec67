#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Build data/archive.json for the archive browser.

Walks the site for sermon/guide pages, pulls date, title and scripture out of
each one (see archive_meta) and writes them newest first.

Usage (from repo root):
  python3 scripts/build_archive.py
  python3 scripts/build_archive.py --dry-run
  python3 scripts/build_archive.py --legacy-js data/archiveData.js
"""

from __future__ import annotations
import argparse, json, os, sys, tempfile
from pathlib import Path
from typing import Iterator, List

from archive_meta import Record, read_record
from validate_archive import archive_errors

# ---------- Paths ----------
ROOT = Path(__file__).resolve().parents[1]
DATA_FILE = ROOT / "data" / "archive.json"

EXCLUDED_DIRS = ("node_modules", ".git", "scripts", "data")
INDEX_NAME = "index.html"

def log(*a):
    if os.getenv("VERBOSE", "0") == "1":
        print("[info]", *a, file=sys.stderr, flush=True)

def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Build the sermon archive data file")
    p.add_argument("--root", type=Path, default=ROOT, help="site root to scan")
    p.add_argument("--out", type=Path, default=DATA_FILE, help="JSON data file to write")
    p.add_argument("--legacy-js", type=Path, help="also write window.ARCHIVE_DATA = [...]; here")
    p.add_argument("--dry-run", action="store_true")
    return p.parse_args(argv)

# ---------- walk ----------
def _excluded(directory: Path, root: Path) -> bool:
    rel = directory.relative_to(root).as_posix()
    return any(name in rel for name in EXCLUDED_DIRS)

def walk(root: Path, directory: Path | None = None) -> Iterator[Path]:
    """Depth-first, in listing order. Unreadable directories raise."""
    directory = root if directory is None else directory
    for entry in directory.iterdir():
        if entry.is_dir():
            if not _excluded(entry, root):
                yield from walk(root, entry)
        elif entry.is_file() and entry.name.endswith(".html") and entry.name != INDEX_NAME:
            yield entry

# ---------- aggregate ----------
def build_records(root: Path) -> List[Record]:
    records = []
    for path in walk(root):
        rec = read_record(path, root)
        log(rec.relativeURL, "|", rec.date or "-", "|", rec.scripture or "-")
        if not rec.date:
            print(f"[warn] no date in file name: {rec.relativeURL}", file=sys.stderr)
        records.append(rec)
    return records

def sort_records(records: List[Record]) -> List[Record]:
    # plain string compare; '' (undated) ends up last
    return sorted(records, key=lambda r: r.date, reverse=True)

def render_json(rows: list[dict]) -> str:
    return json.dumps(rows, ensure_ascii=False, indent=2) + "\n"

def render_legacy_js(rows: list[dict]) -> str:
    return f"window.ARCHIVE_DATA = {json.dumps(rows, ensure_ascii=False, indent=2)};\n"

def _umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask

def _stage(path: Path, text: str) -> str:
    """Write text to a temp file next to path, readable like a plain write."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=path.name, dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        # mkstemp creates 0600
        os.chmod(tmp, 0o666 & ~_umask())
    except BaseException:
        os.remove(tmp)
        raise
    return tmp

def atomic_write_texts(targets: list[tuple[Path, str]]) -> None:
    """Stage every file first so a failed write leaves all targets untouched."""
    staged: list[tuple[str, Path]] = []
    try:
        for path, text in targets:
            staged.append((_stage(path, text), path))
        for tmp, path in staged:
            os.replace(tmp, path)
    finally:
        for tmp, _ in staged:
            if os.path.exists(tmp):
                os.remove(tmp)

def write_archive(records: List[Record], out: Path, legacy_js: Path | None = None) -> int:
    rows = [r.to_dict() for r in records]
    errs = archive_errors(rows)
    if errs:
        raise SystemExit(f"[error] archive records fail schema: {errs[0]} ({len(errs)} total)")
    targets = [(out, render_json(rows))]
    if legacy_js:
        targets.append((legacy_js, render_legacy_js(rows)))
    atomic_write_texts(targets)
    return len(rows)

def entries(n: int) -> str:
    return f"{n} entr{'y' if n == 1 else 'ies'}"

# ---------- main ----------
def main(argv=None) -> None:
    args = parse_args(argv)
    root = args.root.resolve()
    records = sort_records(build_records(root))

    if args.dry_run:
        print(f"[info] {entries(len(records))} (dry run, nothing written)")
        print(render_json([r.to_dict() for r in records[:3]]), end="")
        return

    n = write_archive(records, args.out, args.legacy_js)
    print(f"[ok] wrote {args.out} ({entries(n)})")

if __name__ == "__main__":
    main()
