"""Unit tests for environment configuration."""

import pytest

from mediapreview.config import settings


def test_app_identity():
    assert settings.get_app_name() == "Media Preview"
    assert settings.get_app_version() == "0.1.0"


def test_profile_name(monkeypatch):
    assert settings.get_profile_name() == "default"
    monkeypatch.setenv("MEDIA_PREVIEW_PROFILE", "pymupdf")
    assert settings.get_profile_name() == "pymupdf"


def test_loader_name_defaults_and_overrides(monkeypatch):
    assert settings.get_loader_name() == "pdfplumber"
    assert settings.get_loader_name("pymupdf") == "pymupdf"
    monkeypatch.setenv("MEDIA_PREVIEW_LOADER", "PyMuPDF")
    assert settings.get_loader_name("pdfplumber") == "pymupdf"


def test_invalid_loader_falls_back(monkeypatch, caplog):
    monkeypatch.setenv("MEDIA_PREVIEW_LOADER", "pdfjs")
    assert settings.get_loader_name() == "pdfplumber"
    assert "Invalid document loader" in caplog.text


def test_fetch_timeout(monkeypatch):
    assert settings.get_fetch_timeout() == 10.0
    assert settings.get_fetch_timeout(3.0) == 3.0
    monkeypatch.setenv("MEDIA_PREVIEW_FETCH_TIMEOUT", "2.5")
    assert settings.get_fetch_timeout(3.0) == 2.5


def test_invalid_fetch_timeout_falls_back(monkeypatch):
    monkeypatch.setenv("MEDIA_PREVIEW_FETCH_TIMEOUT", "soon")
    assert settings.get_fetch_timeout() == 10.0
    monkeypatch.setenv("MEDIA_PREVIEW_FETCH_TIMEOUT", "-1")
    assert settings.get_fetch_timeout(4.0) == 4.0


def test_max_file_bytes(monkeypatch):
    assert settings.get_max_file_bytes() == 10 * 1024 * 1024
    monkeypatch.setenv("MEDIA_PREVIEW_MAX_FILE_BYTES", "1024")
    assert settings.get_max_file_bytes() == 1024
    monkeypatch.setenv("MEDIA_PREVIEW_MAX_FILE_BYTES", "lots")
    assert settings.get_max_file_bytes() == 10 * 1024 * 1024


@pytest.mark.parametrize("value", ["0", "-5"])
def test_non_positive_max_file_bytes_falls_back(monkeypatch, caplog, value):
    monkeypatch.setenv("MEDIA_PREVIEW_MAX_FILE_BYTES", value)
    assert settings.get_max_file_bytes() == 10 * 1024 * 1024
    assert "must be positive" in caplog.text


def test_verify_images(monkeypatch):
    assert settings.get_verify_images() is True
    monkeypatch.setenv("MEDIA_PREVIEW_VERIFY_IMAGES", "False")
    assert settings.get_verify_images() is False
