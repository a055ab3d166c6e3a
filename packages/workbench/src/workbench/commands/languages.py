"""Language identifiers derived from file suffixes."""

from __future__ import annotations

from pathlib import PurePath

SUFFIX_LANGUAGES: dict[str, str] = {
    ".py": "py",
    ".js": "js",
    ".mjs": "js",
    ".cjs": "js",
    ".c": "c",
    ".h": "c",
    ".cpp": "cpp",
    ".cc": "cpp",
    ".cxx": "cpp",
    ".hpp": "cpp",
    ".php": "php",
    ".java": "java",
    ".swift": "swift",
    ".html": "html",
    ".htm": "html",
    ".css": "css",
    ".md": "md",
    ".txt": "txt",
}


def language_for_path(path: str | PurePath) -> str | None:
    """Return the language identifier for a path, or None when unknown."""
    return SUFFIX_LANGUAGES.get(PurePath(path).suffix.lower())
