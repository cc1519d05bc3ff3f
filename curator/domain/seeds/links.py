"""Recognition and id extraction for pasted Spotify links."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from curator.errors import ValidationError

WEB_PREFIX = "https://open.spotify.com/"
URI_PREFIX = "spotify:"
ACCEPTED_PREFIXES = (WEB_PREFIX, URI_PREFIX)

ENTITY_KINDS = ("artist", "track", "album", "playlist", "show", "episode", "user")


@dataclass(frozen=True)
class SpotifyLink:
    raw: str
    entity_id: str
    kind: Optional[str] = None


def is_spotify_link(link: str) -> bool:
    return isinstance(link, str) and link.startswith(ACCEPTED_PREFIXES)


def extract_id(link: str) -> str:
    """Return the last segment of ``link`` with any ``?query`` removed.

    Trailing slashes are ignored and URI-form links (``spotify:artist:ID``)
    use their last ``:``-separated field.
    """
    path = link.split("?", 1)[0].split("#", 1)[0]
    if path.startswith(URI_PREFIX) and "/" not in path:
        segments = [segment for segment in path[len(URI_PREFIX):].split(":") if segment]
    elif path.startswith(WEB_PREFIX):
        segments = [segment for segment in path[len(WEB_PREFIX):].split("/") if segment]
    else:
        segments = [segment for segment in path.split("/") if segment]
    return segments[-1] if segments else ""


def _detect_kind(link: str) -> Optional[str]:
    path = link.split("?", 1)[0]
    if path.startswith(URI_PREFIX) and "/" not in path:
        fields = path.split(":")
        candidates = fields[1:-1]
    else:
        candidates = [segment for segment in path[len(WEB_PREFIX):].split("/") if segment][:-1]
    for candidate in reversed(candidates):
        if candidate.lower() in ENTITY_KINDS:
            return candidate.lower()
    return None


def parse_link(link: str, expected_kind: Optional[str] = None) -> SpotifyLink:
    """Validate a pasted link and extract its entity id.

    Raises ValidationError when the link is not a Spotify link, has no id,
    or names a different entity type than ``expected_kind``.
    """
    label = f"Spotify {expected_kind} link" if expected_kind else "Spotify link"
    candidate = (link or "").strip()
    if not is_spotify_link(candidate):
        raise ValidationError(f"Please enter a valid {label}.")

    entity_id = extract_id(candidate)
    kind = _detect_kind(candidate)
    if not entity_id or entity_id.lower() in ENTITY_KINDS:
        raise ValidationError(f"Please enter a valid {label}.", detail="link has no id")
    if expected_kind and kind and kind != expected_kind:
        raise ValidationError(f"Please enter a valid {label}.", detail=f"link points to a {kind}")
    return SpotifyLink(raw=candidate, entity_id=entity_id, kind=kind)


__all__ = [
    "ACCEPTED_PREFIXES",
    "SpotifyLink",
    "URI_PREFIX",
    "WEB_PREFIX",
    "extract_id",
    "is_spotify_link",
    "parse_link",
]
