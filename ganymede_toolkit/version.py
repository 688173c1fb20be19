from __future__ import annotations

"""Application version detection utilities.

Provides a single public function, ``get_app_version()``, used by the
command-line entry point and log banners.
"""

from importlib import metadata
from pathlib import Path
from typing import Optional

_CACHED_VERSION: Optional[str] = None


def get_app_version() -> str:
    """Return the application version string (e.g., ``v1.2.3``).

    Production: read version.txt written by the packaging script.
    Installed package: use the distribution metadata.
    Development fallback: return "vdev".
    """
    global _CACHED_VERSION
    if _CACHED_VERSION:
        return _CACHED_VERSION

    version_file = Path(__file__).resolve().parent.parent / "version.txt"
    if version_file.exists():
        text = version_file.read_text(encoding="ascii", errors="ignore").strip()
        if text:
            _CACHED_VERSION = text if text.startswith("v") else f"v{text}"
            return _CACHED_VERSION

    try:
        _CACHED_VERSION = f"v{metadata.version('ganymede-toolkit')}"
    except metadata.PackageNotFoundError:
        _CACHED_VERSION = "vdev"
    return _CACHED_VERSION
