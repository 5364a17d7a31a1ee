"""Version information for imagedate."""

import subprocess
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Optional

# Used when running from a source tree that was never installed
_FALLBACK_VERSION = "0.3.0"

try:
    __version__ = version("imagedate")
except PackageNotFoundError:
    __version__ = _FALLBACK_VERSION


def source_checkout() -> Optional[Path]:
    """Return the checkout imagedate is imported from, or None.

    Only a directory that holds both the package and its own ``.git`` counts.
    An installed copy inside some unrelated repository (a virtualenv under a
    project checkout, say) is not a checkout of imagedate.
    """
    root = Path(__file__).resolve().parent.parent
    if (root / ".git").exists() and (root / "pyproject.toml").is_file():
        return root
    return None


def get_git_hash() -> Optional[str]:
    """Short commit hash of the imagedate checkout, or None when not in one."""
    root = source_checkout()
    if root is None:
        return None

    try:
        result = subprocess.run(
            ["git", "rev-parse", "--short=7", "HEAD"],
            cwd=root,
            capture_output=True,
            text=True,
            check=True,
            timeout=2,
        )
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired, FileNotFoundError):
        return None
    return result.stdout.strip() or None


def get_version_string() -> str:
    """Version, with ``(git:<hash>)`` appended when running from a checkout."""
    git_hash = get_git_hash()
    if git_hash:
        return f"{__version__} (git:{git_hash})"
    return __version__
