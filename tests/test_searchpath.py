from unixkit.filepaths import append_filename
from unixkit.searchpath import searchpath


def _dirs(tmp_path, *names):
    made = []
    for name in names:
        directory = tmp_path / name
        directory.mkdir()
        made.append(str(directory))
    return made


def test_finds_file_in_later_directory(tmp_path):
    first, second = _dirs(tmp_path, "one", "two")
    (tmp_path / "two" / "tool").write_text("")
    assert searchpath(f"{first}:{second}", "tool") == append_filename(second, "tool")


def test_first_match_wins(tmp_path):
    first, second = _dirs(tmp_path, "one", "two")
    for name in ("one", "two"):
        (tmp_path / name / "tool").write_text("")
    assert searchpath(f"{first}:{second}", "tool") == append_filename(first, "tool")


def test_missing_file_gives_none(tmp_path):
    (first,) = _dirs(tmp_path, "one")
    assert searchpath(first, "absent") is None


def test_empty_entries_are_skipped(tmp_path):
    (only,) = _dirs(tmp_path, "one")
    (tmp_path / "one" / "tool").write_text("")
    assert searchpath(f"::{only}:", "tool") == append_filename(only, "tool")


def test_empty_pathlist_gives_none():
    assert searchpath("", "anything") is None


def test_directories_match_too(tmp_path):
    (parent,) = _dirs(tmp_path, "one")
    (tmp_path / "one" / "inner").mkdir()
    assert searchpath(parent, "inner") == append_filename(parent, "inner")