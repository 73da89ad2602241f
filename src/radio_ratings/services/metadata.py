"""Now-playing metadata from the station's JSON endpoint.

The station publishes a flat JSON document with the current ``title``,
``artist`` and ``album`` plus up to five ``prev_title_N``/``prev_artist_N``
pairs. This module fetches it and normalises it into ``NowPlaying``, including
the track identifier the player uses as the ratings key.
"""

from __future__ import annotations

import base64
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Final
from urllib.parse import quote

import httpx

from radio_ratings.core.exceptions import MetadataError

logger = logging.getLogger(__name__)

UNKNOWN_TITLE: Final[str] = "Unknown Title"
UNKNOWN_ARTIST: Final[str] = "Unknown Artist"
UNKNOWN_ALBUM: Final[str] = "Unknown Album"
MAX_PREVIOUS_TRACKS: Final[int] = 5

# Characters encodeURIComponent leaves untouched besides alphanumerics.
_URI_COMPONENT_SAFE: Final[str] = "-_.!~*'()"
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


class _Missing:
    """Marker for a key absent from the metadata document."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Final[Any] = _Missing()


def _as_js_string(value: Any) -> str:
    """Render a JSON value the way JavaScript string concatenation does."""
    if value is MISSING:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def derive_track_id(title: Any, artist: Any) -> str:
    """Return the ratings key for a track, matching the browser player's scheme.

    ``"title|artist"`` is lowercased, URI-component encoded, base64 encoded and
    stripped of every non-alphanumeric character. Absent parts render as
    ``"undefined"`` (pass ``MISSING``) and nulls as ``"null"``, as they do in
    the player.

    Raises:
        UnicodeEncodeError: if either part contains a lone surrogate.
    """
    joined = f"{_as_js_string(title)}|{_as_js_string(artist)}".lower()
    encoded = quote(joined, safe=_URI_COMPONENT_SAFE)
    b64 = base64.b64encode(encoded.encode("ascii")).decode("ascii")
    return _NON_ALNUM.sub("", b64)


def _display(value: Any, placeholder: str) -> str:
    if value is MISSING or not value:
        return placeholder
    return str(value)


@dataclass(frozen=True)
class PreviousTrack:
    """A recently played track."""

    title: str
    artist: str


@dataclass(frozen=True)
class NowPlaying:
    """Normalised snapshot of the station's metadata document."""

    title: str
    artist: str
    album: str
    track_id: str
    previous: list[PreviousTrack] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> NowPlaying:
        """Build a snapshot, substituting placeholders for missing fields.

        The track id is derived from the raw title and artist so it matches
        what the player computes from the same document.
        """
        raw_title = payload.get("title", MISSING)
        raw_artist = payload.get("artist", MISSING)

        previous: list[PreviousTrack] = []
        for index in range(1, MAX_PREVIOUS_TRACKS + 1):
            title = payload.get(f"prev_title_{index}")
            artist = payload.get(f"prev_artist_{index}")
            if title and artist:
                previous.append(PreviousTrack(title=str(title), artist=str(artist)))

        return cls(
            title=_display(raw_title, UNKNOWN_TITLE),
            artist=_display(raw_artist, UNKNOWN_ARTIST),
            album=str(payload.get("album") or UNKNOWN_ALBUM),
            track_id=derive_track_id(raw_title, raw_artist),
            previous=previous,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON shape served to players."""
        return {
            "title": self.title,
            "artist": self.artist,
            "album": self.album,
            "trackId": self.track_id,
            "previous": [
                {"title": track.title, "artist": track.artist} for track in self.previous
            ],
        }


class MetadataClient:
    """Async HTTP client for the station's metadata document."""

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def fetch_now_playing(self) -> NowPlaying:
        """Fetch and normalise the current metadata document.

        Raises:
            MetadataError: on network failure, non-2xx status or a body that is
                not a JSON object, or text that cannot be encoded.
        """
        try:
            response = await self._client.get(self.url)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            logger.warning("Metadata fetch from %s failed: %s", self.url, exc)
            raise MetadataError(f"Failed to fetch metadata: {exc}") from exc
        except ValueError as exc:
            logger.warning("Metadata from %s is not valid JSON: %s", self.url, exc)
            raise MetadataError("Metadata response is not valid JSON") from exc

        if not isinstance(payload, dict):
            raise MetadataError("Metadata response is not a JSON object")
        try:
            return NowPlaying.from_payload(payload)
        except UnicodeEncodeError as exc:
            logger.warning("Metadata from %s has unencodable text: %s", self.url, exc)
            raise MetadataError("Metadata contains text that cannot be encoded") from exc

    async def close(self) -> None:
        """Release the underlying HTTP connection pool."""
        await self._client.aclose()
