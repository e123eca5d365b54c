"""Tests for downloading, caching and loading FIRI tables."""

from __future__ import annotations

import hashlib
import io
import tarfile
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest

from firijax.table import (
    FIRI_URL,
    available_models,
    download_firi_archive,
    extract_firi_csv,
    load_firi,
)


def _make_archive(members: dict[str, str]) -> bytes:
    """Build an in-memory .tar.gz with the given text members."""
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tar:
        for name, text in members.items():
            payload = text.encode("utf-8")
            info = tarfile.TarInfo(name)
            info.size = len(payload)
            tar.addfile(info, io.BytesIO(payload))
    return buf.getvalue()


def _mock_client(content: bytes):
    """Patch httpx.Client in the download module to return *content*."""
    mocked = patch("firijax.table._download.httpx.Client")
    client_cls = mocked.start()
    response = client_cls.return_value.__enter__.return_value.get.return_value
    response.content = content
    response.raise_for_status.return_value = None
    return mocked, client_cls


# ---------------------------------------------------------------------------
# download_firi_archive
# ---------------------------------------------------------------------------


class TestDownloadFiriArchive:
    """Tests for download_firi_archive."""

    @pytest.mark.ci
    def test_download_success(self, tmp_path: Path) -> None:
        """Actual download from figshare produces a readable archive."""
        dest = tmp_path / "firi.tar.gz"
        result = download_firi_archive(dest)
        assert result.exists()
        assert tarfile.is_tarfile(result)

    def test_creates_parent_dirs(self, tmp_path: Path) -> None:
        dest = tmp_path / "deep" / "nested" / "firi.tar.gz"
        mocked, _ = _mock_client(b"archive bytes")
        try:
            download_firi_archive(dest)
        finally:
            mocked.stop()
        assert dest.read_bytes() == b"archive bytes"

    def test_checksum_match(self, tmp_path: Path) -> None:
        content = b"archive bytes"
        mocked, _ = _mock_client(content)
        try:
            path = download_firi_archive(
                tmp_path / "firi.tar.gz", sha256=hashlib.sha256(content).hexdigest()
            )
        finally:
            mocked.stop()
        assert path.exists()

    def test_checksum_mismatch_removes_file(self, tmp_path: Path) -> None:
        dest = tmp_path / "firi.tar.gz"
        mocked, _ = _mock_client(b"tampered")
        try:
            with pytest.raises(ValueError, match="Checksum mismatch"):
                download_firi_archive(dest, sha256="0" * 64)
        finally:
            mocked.stop()
        assert not dest.exists()

    def test_http_error_propagates(self, tmp_path: Path) -> None:
        mocked, client_cls = _mock_client(b"")
        response = client_cls.return_value.__enter__.return_value.get.return_value
        response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "404", request=httpx.Request("GET", FIRI_URL), response=httpx.Response(404)
        )
        try:
            with pytest.raises(httpx.HTTPStatusError):
                download_firi_archive(tmp_path / "firi.tar.gz")
        finally:
            mocked.stop()

    def test_default_url(self) -> None:
        assert "figshare.com" in FIRI_URL


# ---------------------------------------------------------------------------
# extract_firi_csv
# ---------------------------------------------------------------------------


class TestExtractFiriCsv:
    def test_extracts_csv_members(self, tmp_path: Path, firi_csv_text) -> None:
        archive = tmp_path / "firi.tar.gz"
        archive.write_bytes(
            _make_archive({"firi/firi2018.csv": firi_csv_text, "firi/README.txt": "readme"})
        )
        written = extract_firi_csv(archive, tmp_path / "out")
        assert written == [tmp_path / "out" / "firi2018.csv"]
        assert written[0].read_text() == firi_csv_text

    def test_no_csv_raises(self, tmp_path: Path) -> None:
        archive = tmp_path / "firi.tar.gz"
        archive.write_bytes(_make_archive({"firi/README.txt": "readme"}))
        with pytest.raises(ValueError, match="No CSV"):
            extract_firi_csv(archive, tmp_path / "out")

    def test_missing_archive_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            extract_firi_csv(tmp_path / "nope.tar.gz", tmp_path)


# ---------------------------------------------------------------------------
# load_firi / available_models
# ---------------------------------------------------------------------------


class TestLoadFiri:
    def test_downloads_once_then_uses_cache(self, monkeypatch, tmp_path, firi_csv_text) -> None:
        monkeypatch.setenv("FIRIJAX_CACHE", str(tmp_path / "cache"))
        mocked, client_cls = _mock_client(_make_archive({"firi/firi2018.csv": firi_csv_text}))
        try:
            first = load_firi()
            second = load_firi()
        finally:
            mocked.stop()

        assert client_cls.return_value.__enter__.return_value.get.call_count == 1
        assert first.n_profiles == second.n_profiles == 4
        assert (tmp_path / "cache" / "models" / "firi2018.csv").exists()

    def test_explicit_path_skips_cache(self, monkeypatch, tmp_path, firi_csv) -> None:
        monkeypatch.setenv("FIRIJAX_CACHE", str(tmp_path / "cache"))
        with patch("firijax.table._providers.download_firi_archive") as mock_dl:
            table = load_firi(firi_csv)
        mock_dl.assert_not_called()
        assert table.n_altitudes == 3

    def test_download_failure_without_cache_raises(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv("FIRIJAX_CACHE", str(tmp_path / "cache"))
        with patch(
            "firijax.table._providers.download_firi_archive",
            side_effect=httpx.ConnectError("offline"),
        ):
            with pytest.raises(RuntimeError, match="no cached table"):
                load_firi()

    def test_unknown_model_raises(self, monkeypatch, tmp_path, firi_csv_text) -> None:
        monkeypatch.setenv("FIRIJAX_CACHE", str(tmp_path / "cache"))
        mocked, _ = _mock_client(_make_archive({"firi/firi2018.csv": firi_csv_text}))
        try:
            with pytest.raises(ValueError, match="firi2030"):
                load_firi(model="firi2030")
        finally:
            mocked.stop()


class TestAvailableModels:
    def test_lists_csv_stems(self, tmp_path: Path) -> None:
        (tmp_path / "firi2018.csv").write_text("x")
        (tmp_path / "firi2016.csv").write_text("x")
        (tmp_path / "firi.tar.gz").write_bytes(b"x")
        assert available_models(tmp_path) == ["firi2016", "firi2018"]

    def test_missing_directory(self, tmp_path: Path) -> None:
        assert available_models(tmp_path / "nope") == []

    def test_default_is_model_cache(self, monkeypatch, tmp_path: Path) -> None:
        monkeypatch.setenv("FIRIJAX_CACHE", str(tmp_path))
        (tmp_path / "models").mkdir()
        (tmp_path / "models" / "firi2018.csv").write_text("x")
        assert available_models() == ["firi2018"]
