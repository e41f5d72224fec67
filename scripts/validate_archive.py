#!/usr/bin/env python3
import json, sys
from pathlib import Path
from jsonschema import Draft202012Validator

ROOT = Path(__file__).resolve().parents[1]
SCHEMA_PATH = ROOT / "schemas" / "archive.schema.json"
TARGET = ROOT / "data" / "archive.json"

def load_validator() -> Draft202012Validator:
    schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
    return Draft202012Validator(schema)

def archive_errors(data) -> list[str]:
    """One message per schema violation, located as idx=N field=name."""
    out = []
    for err in load_validator().iter_errors(data):
        parts = list(err.path)
        idx = parts[0] if parts else "(root)"
        field = "/".join(map(str, parts[1:])) or "(record)"
        out.append(f"idx={idx} field={field}: {err.message}")
    return out

def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    path = Path(argv[0]) if argv else TARGET
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        print(f"[error] {path} not found", file=sys.stderr)
        return 2
    except json.JSONDecodeError as e:
        print(f"[error] {path}: JSON decode error at line {e.lineno} col {e.colno}: {e.msg}", file=sys.stderr)
        return 2

    errs = archive_errors(data)
    if errs:
        for e in errs:
            print(f"[invalid] {e}")
        return 1
    n = len(data)
    print(f"[ok] {path} valid ({n} entr{'y' if n == 1 else 'ies'})")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
