"""release-planner: conventional-commit release tagging.

Derives the next version tag from conventional commit subjects since the
last tag, renders grouped release notes, and creates an annotated tag.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
