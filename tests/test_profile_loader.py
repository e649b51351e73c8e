"""Unit tests for profile loader."""

import pytest
import yaml
from unittest.mock import patch

from mediapreview.config.profile_loader import (
    PreviewProfile,
    load_profile,
    list_available_profiles,
    get_default_profile,
    get_profiles_dir,
    set_profile,
    get_profile,
    reset_profile,
)


@pytest.fixture(autouse=True)
def _reset_profile():
    reset_profile()
    yield
    reset_profile()


class TestPreviewProfile:
    """Test PreviewProfile dataclass."""

    def test_profile_defaults(self):
        """Test PreviewProfile defaults to PDF documents on page 1."""
        profile = PreviewProfile(name="test")

        assert profile.document_types == ["application/pdf"]
        assert profile.page_number == 1
        assert profile.loader == "pdfplumber"
        assert profile.guess_octet_stream is True

    def test_profile_normalises_document_types(self):
        """Test document types are lowercased and stripped."""
        profile = PreviewProfile(name="test", document_types=[" Application/PDF ", "", "application/x-pdf"])

        assert profile.document_types == ["application/pdf", "application/x-pdf"]

    def test_profile_rejects_page_zero(self):
        """Test that page_number must be >= 1."""
        with pytest.raises(ValueError, match="Page number must be >= 1"):
            PreviewProfile(name="test", page_number=0)

    def test_profile_from_dict(self):
        """Test creating PreviewProfile from dictionary."""
        data = {
            "name": "test",
            "description": "Test",
            "document_types": ["application/pdf", "application/x-pdf"],
            "loader": "pymupdf",
            "guess_octet_stream": False,
            "fetch_timeout": 3,
        }

        profile = PreviewProfile.from_dict(data)

        assert profile.name == "test"
        assert profile.document_types == ["application/pdf", "application/x-pdf"]
        assert profile.loader == "pymupdf"
        assert profile.guess_octet_stream is False
        assert profile.fetch_timeout == 3.0

    def test_profile_to_dict_round_trip(self):
        """Test converting PreviewProfile to dictionary and back."""
        profile = PreviewProfile(name="test", description="Test", loader="pymupdf")

        data = profile.to_dict()

        assert data["name"] == "test"
        assert data["loader"] == "pymupdf"
        assert PreviewProfile.from_dict(data) == profile


class TestLoadProfile:
    """Test profile loading."""

    def test_load_profile_from_dir(self, tmp_path):
        """Test loading a profile from YAML."""
        profiles_dir = tmp_path / "profiles"
        profiles_dir.mkdir()
        (profiles_dir / "chat.yaml").write_text(
            yaml.dump({"name": "chat", "description": "Chat", "document_types": ["application/pdf"]}),
            encoding='utf-8'
        )

        with patch('mediapreview.config.profile_loader.get_profiles_dir', return_value=profiles_dir):
            profile = load_profile("chat")

        assert profile.name == "chat"
        assert profile.description == "Chat"

    def test_load_profile_not_found(self, tmp_path):
        """Test loading non-existent profile."""
        with patch('mediapreview.config.profile_loader.get_profiles_dir', return_value=tmp_path):
            with pytest.raises(FileNotFoundError):
                load_profile("nonexistent")

    def test_load_profile_invalid_yaml(self, tmp_path):
        """Test loading invalid YAML profile."""
        (tmp_path / "invalid.yaml").write_text("invalid: yaml: content: [", encoding='utf-8')

        with patch('mediapreview.config.profile_loader.get_profiles_dir', return_value=tmp_path):
            with pytest.raises(ValueError):
                load_profile("invalid")

    def test_load_profile_empty_file(self, tmp_path):
        """Test loading an empty profile file."""
        (tmp_path / "empty.yaml").write_text("", encoding='utf-8')

        with patch('mediapreview.config.profile_loader.get_profiles_dir', return_value=tmp_path):
            with pytest.raises(ValueError, match="empty"):
                load_profile("empty")

    def test_bundled_profiles_load(self):
        """Test that the profiles shipped in configs/profiles are valid."""
        assert get_profiles_dir().exists()
        for name in list_available_profiles():
            profile = load_profile(name)
            assert profile.name == name
            assert "application/pdf" in profile.document_types


class TestProfileManager:
    """Test profile manager."""

    def test_set_and_get_profile(self, tmp_path):
        """Test setting and getting profile."""
        (tmp_path / "test.yaml").write_text(yaml.dump({"name": "test"}), encoding='utf-8')

        with patch('mediapreview.config.profile_loader.get_profiles_dir', return_value=tmp_path):
            profile = set_profile("test")
            assert profile.name == "test"
            assert get_profile().name == "test"

    def test_set_profile_instance(self):
        """Test activating an already built profile without touching disk."""
        custom = PreviewProfile(name="inline", loader="pymupdf")

        with patch('mediapreview.config.profile_loader.load_profile') as mock_load:
            assert set_profile(custom) is custom
            mock_load.assert_not_called()

        assert get_profile() is custom
        reset_profile()
        assert get_profile().name == "default"

    def test_get_default_profile_without_files(self, tmp_path):
        """Test default profile falls back to built-in values when no YAML exists."""
        with patch('mediapreview.config.profile_loader.get_profiles_dir', return_value=tmp_path):
            profile = get_default_profile()

        assert profile.name == "default"
        assert profile.document_types == ["application/pdf"]

    def test_get_profile_defaults(self):
        """Test get_profile returns the default profile when none is set."""
        assert get_profile().name == "default"


class TestListProfiles:
    """Test listing available profiles."""

    def test_list_available_profiles(self, tmp_path):
        """Test listing profiles."""
        (tmp_path / "default.yaml").write_text("name: default", encoding='utf-8')
        (tmp_path / "custom.yaml").write_text("name: custom", encoding='utf-8')

        with patch('mediapreview.config.profile_loader.get_profiles_dir', return_value=tmp_path):
            profiles = list_available_profiles()

        assert profiles == ["custom", "default"]

    def test_list_available_profiles_missing_dir(self, tmp_path):
        """Test listing profiles when the directory does not exist."""
        with patch('mediapreview.config.profile_loader.get_profiles_dir', return_value=tmp_path / "missing"):
            assert list_available_profiles() == ["default"]
