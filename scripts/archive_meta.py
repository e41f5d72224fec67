#!/usr/bin/env python3
"""
Per-page metadata for the sermon archive.

Pages are hand-authored HTML with a handful of recurring conventions, so
everything here is regex matching against those conventions, not parsing.
"""

from __future__ import annotations
import re
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Callable, List, Tuple

NO_TITLE = "제목 없음"

# ---------- Regex ----------
LONG_DATE_RE  = re.compile(r"^([0-9]{4})-([0-9]{2})-([0-9]{2})")
SHORT_DATE_RE = re.compile(r"^([0-9]{2})([0-9]{2})([0-9]{2})")

TITLE_RE        = re.compile(r"<title>(.*?)</title>", re.I)
TITLE_PREFIX_RE = re.compile(r"^비주얼 매거진:\s*")
TITLE_SUFFIX_RE = re.compile(r"\s*-\s*[0-9]{4}\s+.*$")   # " - 2026 송구영신예배"

BR_RE    = re.compile(r"<br\s*/?>", re.I)
TAG_RE   = re.compile(r"<[^>]*>")
NL_RE    = re.compile(r"\n+")
MULTI_WS = re.compile(r"\s\s+")

DATA_SCRIPTURE_RE = re.compile(r'data-scripture="([^"]+)"')
SCRIPTURE_REF_RE  = re.compile(r'class="scripture-ref"[^>]*>([\s\S]*?)(?:</span>|</div>)', re.I)
SERMON_INFO_RE    = re.compile(r"SERMON INFOGRAPHIC\s*•\s*([\s\S]*?)(?:</div>|</span>)", re.I)
SUBTITLE_RE       = re.compile(r'class="subtitle"[^>]*>([\s\S]*?)</div>', re.I)
BIBLE_BOX_RE      = re.compile(r'<div class="bible-box">[\s\S]*?<p>([\s\S]*?)</p>', re.I)
TRAILING_PAREN_RE = re.compile(r"\s*\([\s\S]*?\)$")
BOOK_ICON_RE      = re.compile(r'<i class="fase? fa-book-open[^>]*></i>\s*([\s\S]*?)(?:</span>|</div>)', re.I)
GUIDE_INFO_RE     = re.compile(r'class="guide-info"[^>]*>[\s\S]*?\|\s*([\s\S]*?)(?:</div>|</span>)', re.I)


@dataclass
class Record:
    fileName: str
    relativeURL: str
    date: str
    title: str
    scripture: str

    def to_dict(self) -> dict:
        return asdict(self)


def clean_text(text: str | None) -> str:
    """Flatten an HTML fragment to one line of plain text."""
    if not text:
        return ""
    s = BR_RE.sub(" ", text)
    s = TAG_RE.sub("", s)
    s = NL_RE.sub(" ", s)
    s = MULTI_WS.sub(" ", s)
    return s.strip()


# ---------- date / title ----------
def extract_date(file_name: str) -> str:
    """YYYY-MM-DD… or YYMMDD… at the start of the name; '' otherwise."""
    m = LONG_DATE_RE.match(file_name)
    if m:
        return f"{m.group(1)}-{m.group(2)}-{m.group(3)}"
    m = SHORT_DATE_RE.match(file_name)
    if m:
        return f"20{m.group(1)}-{m.group(2)}-{m.group(3)}"
    return ""

def extract_title(content: str) -> str:
    m = TITLE_RE.search(content)
    title = m.group(1).strip() if m else NO_TITLE
    title = TITLE_PREFIX_RE.sub("", title)
    title = TITLE_SUFFIX_RE.sub("", title)
    return title


# ---------- scripture strategies ----------
def _first_group(pattern: re.Pattern, content: str) -> str | None:
    m = pattern.search(content)
    return m.group(1) if m else None

def from_data_attribute(content: str) -> str:
    # already a plain attribute value
    return _first_group(DATA_SCRIPTURE_RE, content) or ""

def from_scripture_ref(content: str) -> str:
    return clean_text(_first_group(SCRIPTURE_REF_RE, content))

def from_sermon_infographic(content: str) -> str:
    return clean_text(_first_group(SERMON_INFO_RE, content))

def from_subtitle(content: str) -> str:
    return clean_text(_first_group(SUBTITLE_RE, content))

def from_bible_box(content: str) -> str:
    text = clean_text(_first_group(BIBLE_BOX_RE, content))
    return TRAILING_PAREN_RE.sub("", text)

def from_book_icon(content: str) -> str:
    return clean_text(_first_group(BOOK_ICON_RE, content))

def from_guide_info(content: str) -> str:
    return clean_text(_first_group(GUIDE_INFO_RE, content))


# Order matters: most explicit markup first, older page styles later.
SCRIPTURE_STRATEGIES: List[Tuple[str, Callable[[str], str]]] = [
    ("data-scripture",     from_data_attribute),
    ("scripture-ref",      from_scripture_ref),
    ("sermon-infographic", from_sermon_infographic),
    ("subtitle",           from_subtitle),
    ("bible-box",          from_bible_box),
    ("book-icon",          from_book_icon),
    ("guide-info",         from_guide_info),
]

def match_scripture(content: str) -> Tuple[str, str]:
    """Return (strategy name, reference) for the first strategy that finds one."""
    for name, strategy in SCRIPTURE_STRATEGIES:
        found = strategy(content)
        if found:
            return name, found
    return "", ""

def extract_scripture(content: str) -> str:
    return match_scripture(content)[1]


# ---------- record ----------
def extract_metadata(content: str, file_name: str, relative_url: str) -> Record:
    return Record(
        fileName=file_name,
        relativeURL=relative_url,
        date=extract_date(file_name),
        title=extract_title(content),
        scripture=extract_scripture(content),
    )

def read_record(path: Path, root: Path) -> Record:
    """Read one page from disk; I/O errors are left to the caller."""
    content = path.read_text(encoding="utf-8", errors="replace")
    return extract_metadata(content, path.name, path.relative_to(root).as_posix())
