"""Profile loader for configurable preview behavior."""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from dataclasses import dataclass, field

DEFAULT_DOCUMENT_TYPES = ["application/pdf"]

_active_profile: Optional["PreviewProfile"] = None


@dataclass
class PreviewProfile:
    """Configuration profile for preview behavior."""
    name: str
    description: str = ""
    document_types: List[str] = field(default_factory=lambda: list(DEFAULT_DOCUMENT_TYPES))
    page_number: int = 1
    loader: str = "pdfplumber"  # "pdfplumber" | "pymupdf"
    guess_octet_stream: bool = True
    fetch_timeout: float = 10.0

    def __post_init__(self):
        """Normalise document types and validate page number."""
        self.document_types = [t.strip().lower() for t in self.document_types if t and t.strip()]
        if self.page_number < 1:
            raise ValueError(f"Page number must be >= 1, got {self.page_number}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PreviewProfile':
        """Create PreviewProfile from dictionary."""
        return cls(
            name=data.get('name', 'default'),
            description=data.get('description', ''),
            document_types=list(data.get('document_types') or DEFAULT_DOCUMENT_TYPES),
            page_number=int(data.get('page_number', 1)),
            loader=data.get('loader', 'pdfplumber'),
            guess_octet_stream=bool(data.get('guess_octet_stream', True)),
            fetch_timeout=float(data.get('fetch_timeout', 10.0)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'name': self.name,
            'description': self.description,
            'document_types': list(self.document_types),
            'page_number': self.page_number,
            'loader': self.loader,
            'guess_octet_stream': self.guess_octet_stream,
            'fetch_timeout': self.fetch_timeout,
        }


def get_profiles_dir() -> Path:
    """Get directory containing profile YAML files.

    Returns:
        Path to profiles directory
    """
    # mediapreview/config/profile_loader.py -> mediapreview/config -> mediapreview -> root
    project_root = Path(__file__).resolve().parent.parent.parent
    return project_root / "configs" / "profiles"


def load_profile(profile_name: str = "default") -> PreviewProfile:
    """Load a configuration profile.

    Args:
        profile_name: Name of profile to load (without .yaml extension)

    Returns:
        PreviewProfile object

    Raises:
        FileNotFoundError: If profile file doesn't exist
        ValueError: If profile file is invalid
    """
    profile_path = get_profiles_dir() / f"{profile_name}.yaml"

    if not profile_path.exists():
        raise FileNotFoundError(f"Profile not found: {profile_name} (expected at {profile_path})")

    try:
        with open(profile_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in profile {profile_name}: {e}") from e

    if not data:
        raise ValueError(f"Profile file is empty: {profile_path}")

    try:
        return PreviewProfile.from_dict(data)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Error loading profile {profile_name}: {e}") from e


def list_available_profiles() -> List[str]:
    """List all available profile names.

    Returns:
        List of profile names (without .yaml extension)
    """
    profiles_dir = get_profiles_dir()
    if not profiles_dir.exists():
        return ["default"]
    profiles = [p.stem for p in profiles_dir.glob("*.yaml")]
    return sorted(profiles) if profiles else ["default"]


def get_default_profile() -> PreviewProfile:
    """Get default profile (always available).

    Returns:
        Default PreviewProfile (loaded from default.yaml if present)
    """
    try:
        return load_profile("default")
    except (FileNotFoundError, ValueError):
        return PreviewProfile(name="default", description="Built-in defaults")


def set_profile(profile: Union[str, PreviewProfile] = "default") -> PreviewProfile:
    """Make a profile the one dispatchers pick up when given none.

    Args:
        profile: Profile name to load from the profiles directory, or an
            already built PreviewProfile

    Returns:
        The now active PreviewProfile

    Raises:
        FileNotFoundError: If a named profile doesn't exist
        ValueError: If a named profile is invalid
    """
    global _active_profile
    if not isinstance(profile, PreviewProfile):
        profile = load_profile(profile)
    _active_profile = profile
    return _active_profile


def get_profile() -> PreviewProfile:
    """Get the active profile, activating the default one on first use.

    Returns:
        Active PreviewProfile
    """
    global _active_profile
    if _active_profile is None:
        _active_profile = get_default_profile()
    return _active_profile


def reset_profile() -> None:
    """Forget the active profile; the next get_profile() reloads the default."""
    global _active_profile
    _active_profile = None
