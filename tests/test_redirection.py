import os

import pytest

from unixkit.redirection import RedirectionError, redirect, resolve_target
from unixkit.shellcmd import CmdType, ShellCmd, ShellEnvironment


@pytest.fixture
def env():
    return ShellEnvironment(name0="myshell")


def _fd_identity(fd):
    info = os.fstat(fd)
    return info.st_dev, info.st_ino


def _fd_identity_of_path(path):
    info = os.stat(path)
    return info.st_dev, info.st_ino


def test_resolve_target_keeps_absolute_path(tmp_path):
    target = str(tmp_path / "data.txt")
    assert resolve_target(target, str(tmp_path)) == target


def test_resolve_target_finds_relative_file_in_cdpath(tmp_path):
    (tmp_path / "data.txt").write_text("x")
    assert resolve_target("data.txt", f"/nonexistent:{tmp_path}") == f"{tmp_path}/data.txt"


def test_resolve_target_unchanged_when_not_found(tmp_path):
    assert resolve_target("missing.txt", str(tmp_path)) == "missing.txt"


def test_output_redirection_truncates(tmp_path, env):
    out = tmp_path / "out.txt"
    out.write_text("old content that is long\n")
    t = ShellCmd(CmdType.COMMAND, ["echo"], outfile=str(out))
    with redirect(t, env):
        os.write(1, b"new\n")
    assert out.read_text() == "new\n"


def test_output_redirection_appends(tmp_path, env):
    out = tmp_path / "out.txt"
    out.write_text("first\n")
    t = ShellCmd(CmdType.COMMAND, ["echo"], outfile=str(out), append=True)
    with redirect(t, env):
        os.write(1, b"second\n")
    assert out.read_text() == "first\nsecond\n"


def test_stdout_restored_after_block(tmp_path, env):
    before = _fd_identity(1)
    t = ShellCmd(CmdType.COMMAND, ["echo"], outfile=str(tmp_path / "o"))
    with redirect(t, env):
        assert _fd_identity(1) == _fd_identity_of_path(tmp_path / "o")
    assert _fd_identity(1) == before


def test_input_redirection(tmp_path, env):
    src = tmp_path / "in.txt"
    src.write_bytes(b"payload")
    before = _fd_identity(0)
    t = ShellCmd(CmdType.COMMAND, ["cat"], infile=str(src))
    with redirect(t, env):
        inside = _fd_identity(0)
        data = os.read(0, 100)
    assert inside == _fd_identity_of_path(src)
    assert data == b"payload"
    assert _fd_identity(0) == before


def test_missing_input_raises_and_restores_output(tmp_path, env):
    out = tmp_path / "out.txt"
    missing = str(tmp_path / "missing.txt")
    before = _fd_identity(1)
    t = ShellCmd(CmdType.COMMAND, ["cat"], infile=missing, outfile=str(out))
    with pytest.raises(RedirectionError) as excinfo:
        with redirect(t, env):
            pass
    assert excinfo.value.filename == missing
    assert str(excinfo.value).startswith("myshell: ")
    assert str(excinfo.value).endswith(missing)
    assert out.exists()
    assert _fd_identity(1) == before


def test_output_into_missing_directory_raises(tmp_path, env):
    t = ShellCmd(CmdType.COMMAND, ["echo"], outfile=str(tmp_path / "no" / "out"))
    with pytest.raises(RedirectionError):
        with redirect(t, env):
            pass