import os

from unixkit.filepaths import (
    append_filename,
    directory_exists,
    file_exists,
    get_absolute_path,
    get_file_extension,
    get_filename,
    get_parent_directory,
    is_absolute_path,
    join_paths,
    normalize_path,
    path_exists,
)


def test_join_adds_single_separator():
    assert join_paths("a", "b") == "a/b"
    assert join_paths("a/", "b") == "a/b"


def test_join_with_empty_left_keeps_right():
    assert join_paths("", "b") == "b"


def test_append_filename_matches_join():
    joined = append_filename("/usr/bin", "ls")
    assert joined == join_paths("/usr/bin", "ls")
    assert joined.startswith("/usr/bin/") and joined.endswith("ls")


def test_parent_directory_posix_rules():
    assert get_parent_directory("/usr/lib") == "/usr"
    assert get_parent_directory("/usr/lib/") == "/usr"
    assert get_parent_directory("file") == "."
    assert get_parent_directory("/") == "/"
    assert get_parent_directory("") == "."


def test_filename_posix_rules():
    assert get_filename("/usr/lib") == "lib"
    assert get_filename("/usr/lib/") == "lib"
    assert get_filename("/") == "/"
    assert get_filename("") == "."


def test_parent_and_filename_rejoin(tmp_path):
    target = tmp_path / "sub" / "name.txt"
    path = str(target)
    assert join_paths(get_parent_directory(path), get_filename(path)) == path


def test_normalize_resolves_dots(tmp_path):
    (tmp_path / "x").mkdir()
    messy = os.path.join(str(tmp_path), "x", "..", ".")
    assert normalize_path(messy) == os.path.realpath(str(tmp_path))
    assert get_absolute_path(messy) == normalize_path(messy)


def test_normalize_missing_is_none(tmp_path):
    assert normalize_path(str(tmp_path / "missing")) is None
    assert get_absolute_path(str(tmp_path / "missing")) is None


def test_is_absolute():
    assert is_absolute_path("/etc")
    assert not is_absolute_path("etc")
    assert not is_absolute_path("")


def test_existence_checks(tmp_path):
    regular = tmp_path / "f.txt"
    regular.write_text("data")
    assert path_exists(str(regular)) and file_exists(str(regular))
    assert not directory_exists(str(regular))
    assert path_exists(str(tmp_path)) and directory_exists(str(tmp_path))
    assert not file_exists(str(tmp_path))
    missing = str(tmp_path / "nope")
    assert not (path_exists(missing) or file_exists(missing) or directory_exists(missing))


def test_file_extension():
    assert get_file_extension("script.sh") == "sh"
    assert get_file_extension("archive.tar.gz") == "gz"
    assert get_file_extension(".bashrc") is None
    assert get_file_extension("trailing.") is None
    assert get_file_extension("plain") is None