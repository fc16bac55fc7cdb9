from __future__ import annotations

import stat

import pytest

from example_package.config import TokenFiles, get_api_token, save_api_token


@pytest.fixture
def files(tmp_path, monkeypatch):
    monkeypatch.delenv("PYPI_API_TOKEN", raising=False)
    return TokenFiles(token_file=tmp_path / "creds" / "token")


def test_token_from_environment(files, monkeypatch):
    monkeypatch.setenv("PYPI_API_TOKEN", "pypi-from-env")
    assert get_api_token(files) == "pypi-from-env"


def test_missing_token_is_actionable(files):
    with pytest.raises(FileNotFoundError) as exc:
        get_api_token(files)
    assert "PYPI_API_TOKEN" in str(exc.value)


def test_save_then_load(files):
    path = save_api_token("pypi-secret\n", files)

    assert path == files.token_file
    assert stat.S_IMODE(path.stat().st_mode) == 0o600
    assert get_api_token(files) == "pypi-secret"


def test_environment_wins_over_file(files, monkeypatch):
    save_api_token("pypi-on-disk", files)
    monkeypatch.setenv("PYPI_API_TOKEN", "pypi-from-env")
    assert get_api_token(files) == "pypi-from-env"


def test_token_without_prefix_rejected(files, monkeypatch):
    with pytest.raises(ValueError):
        save_api_token("not-a-token", files)
    assert not files.token_file.exists()

    monkeypatch.setenv("PYPI_API_TOKEN", "abc123")
    with pytest.raises(ValueError):
        get_api_token(files)


def test_token_file_created_owner_only(files, monkeypatch):
    from example_package import config

    modes = []
    real_open = config.os.open

    def recording_open(path, flags, mode=0o777):
        modes.append(mode)
        return real_open(path, flags, mode)

    monkeypatch.setattr(config.os, "open", recording_open)

    save_api_token("pypi-secret", files)

    assert modes == [0o600]


def test_existing_token_file_is_tightened(files):
    files.token_file.parent.mkdir(parents=True)
    files.token_file.write_text("pypi-old")
    files.token_file.chmod(0o644)

    save_api_token("pypi-new", files)

    assert stat.S_IMODE(files.token_file.stat().st_mode) == 0o600
    assert files.token_file.read_text() == "pypi-new"
