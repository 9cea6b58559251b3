from dataclasses import dataclass
from datetime import datetime
import hashlib
import os


@dataclass(frozen=True)
class Version:
    """
    Semantic version information for youup.

    Carries the semver triple plus a hash of the installed package
    sources and the release date.
    """
    major: int
    minor: int
    patch: int
    hash: str
    date: datetime

    def __str__(self) -> str:
        """Return the semantic version string (e.g., '0.2.0')."""
        return f"{self.major}.{self.minor}.{self.patch}"

    def full_version(self) -> str:
        """Return version with source hash and release date."""
        return (
            f"{self} (hash: {self.hash[:8]}, "
            f"date: {self.date.strftime('%Y-%m-%d')})"
        )

    def date_string(self, fmt: str = "%Y-%m-%d") -> str:
        """Return formatted date string."""
        return self.date.strftime(fmt)


def _compute_package_hash() -> str:
    """
    Hash the Python sources of the youup package.

    Only ``.py`` files are considered so that bytecode caches and editor
    droppings do not change the reported hash.
    """
    package_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    hasher = hashlib.sha256()

    for root, dirs, files in os.walk(package_dir):
        dirs[:] = sorted(d for d in dirs if d not in ('__pycache__', '.pytest_cache'))

        for file in sorted(files):
            if not file.endswith('.py'):
                continue

            filepath = os.path.join(root, file)
            hasher.update(os.path.relpath(filepath, package_dir).encode())
            try:
                with open(filepath, 'rb') as f:
                    hasher.update(f.read())
            except OSError:
                continue

    return hasher.hexdigest()


YOUUP_VERSION = Version(
    major=0,
    minor=2,
    patch=0,
    hash=_compute_package_hash(),
    date=datetime(2026, 10, 16),
)
