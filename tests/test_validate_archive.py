import json

import validate_archive


GOOD = [
    {"fileName": "260111info.html", "relativeURL": "260111info.html",
     "date": "2026-01-11", "title": "빛과 소금", "scripture": "마태복음 5:13-16"},
    {"fileName": "about.html", "relativeURL": "about.html",
     "date": "", "title": "제목 없음", "scripture": ""},
]


def dump(tmp_path, data):
    p = tmp_path / "archive.json"
    p.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return p


def test_valid_archive(tmp_path, capsys):
    p = dump(tmp_path, GOOD)
    assert validate_archive.main([str(p)]) == 0
    assert capsys.readouterr().out == f"[ok] {p} valid (2 entries)\n"


def test_partial_date_rejected(tmp_path, capsys):
    bad = [dict(GOOD[0], date="2026-01")]
    assert validate_archive.main([str(dump(tmp_path, bad))]) == 1
    assert "[invalid] idx=0 field=date:" in capsys.readouterr().out


def test_missing_and_extra_keys_rejected():
    row = dict(GOOD[0], extra="x")
    del row["scripture"]
    errs = validate_archive.archive_errors([row])
    assert len(errs) == 2
    assert all(e.startswith("idx=0 field=(record)") for e in errs)


def test_top_level_must_be_array():
    [err] = validate_archive.archive_errors({"entries": GOOD})
    assert err.startswith("idx=(root) field=(record):")
    assert "is not of type 'array'" in err


def test_missing_file(tmp_path, capsys):
    assert validate_archive.main([str(tmp_path / "nope.json")]) == 2
    assert "[error]" in capsys.readouterr().err


def test_broken_json(tmp_path):
    p = tmp_path / "archive.json"
    p.write_text("window.ARCHIVE_DATA = [];", encoding="utf-8")
    assert validate_archive.main([str(p)]) == 2


def test_non_ascii_digit_date_rejected():
    bad = [dict(GOOD[0], date="20٢٦-٠١-١١")]
    [err] = validate_archive.archive_errors(bad)
    assert err.startswith("idx=0 field=date:")
