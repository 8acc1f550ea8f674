"""Frame asset loading and media path resolution."""

from __future__ import annotations

from pathlib import Path

DEFAULT_DELIMITER = "SPLIT"
DEFAULT_PLACEHOLDER = "."


class AssetNotFoundError(FileNotFoundError):
    """Raised when a frame asset or media file cannot be resolved."""


def load_frames(
    path: Path,
    *,
    delimiter: str = DEFAULT_DELIMITER,
    placeholder: str = DEFAULT_PLACEHOLDER,
) -> list[str]:
    """Read a frame asset and split it into display frames.

    Every `placeholder` character is replaced with a space before splitting.
    """
    if not delimiter:
        raise ValueError("delimiter must not be empty")
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise AssetNotFoundError(f"Frame asset not found: {path}") from exc
    if placeholder:
        text = text.replace(placeholder, " ")
    return text.split(delimiter)


def resolve_media_uri(path: Path) -> str:
    """Resolve a media file to an absolute `file://` URI."""
    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError as exc:
        raise AssetNotFoundError(f"Media file not found: {path}") from exc
    if not resolved.is_file():
        raise AssetNotFoundError(f"Media path is not a file: {resolved}")
    return resolved.as_uri()
