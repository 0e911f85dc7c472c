"""Tests for tool location overrides."""

from pathlib import PureWindowsPath

from godll.config import get_go_executable, get_vswhere_path


def test_go_executable_default(monkeypatch):
    monkeypatch.delenv("GODLL_GO", raising=False)

    assert get_go_executable() == "go"


def test_go_executable_override(monkeypatch):
    monkeypatch.setenv("GODLL_GO", "/usr/local/go/bin/go")

    assert get_go_executable() == "/usr/local/go/bin/go"


def test_vswhere_override(monkeypatch, tmp_path):
    monkeypatch.setenv("GODLL_VSWHERE", str(tmp_path / "vswhere.exe"))

    assert get_vswhere_path() == tmp_path / "vswhere.exe"


def test_vswhere_default_location(monkeypatch):
    monkeypatch.delenv("GODLL_VSWHERE", raising=False)
    monkeypatch.setenv("ProgramFiles(x86)", "D:\\Programs")

    path = get_vswhere_path()

    assert PureWindowsPath(str(path)).name == "vswhere.exe"
    assert str(path).startswith("D:\\Programs")
    assert "Installer" in str(path)
