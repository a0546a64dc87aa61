"""Submission checks: platform detection, URL fingerprints and duplicate detection.

A submitted link must point at a YouTube or Instagram video. Its fingerprint
identifies the underlying video, so ``youtu.be/<id>`` and
``youtube.com/watch?v=<id>&t=30`` are recognised as the same submission.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Literal, Protocol
from urllib.parse import parse_qs, parse_qsl, urlencode, urlsplit, urlunsplit

from blake3 import blake3

from kohliverse.ranking.errors import UnrecognizedUrl

FingerprintMode = Literal["canonical", "legacy"]


class Platform(str, Enum):
    """Supported video hosts."""

    YOUTUBE = "youtube"
    INSTAGRAM = "instagram"


_VIDEO_ID_RE = re.compile(r"[A-Za-z0-9_-]+")

_YOUTUBE_HOSTS = frozenset({"youtube.com", "m.youtube.com"})
_YOUTUBE_SHORT_HOST = "youtu.be"
_YOUTUBE_PATH_KINDS = frozenset({"v", "e", "embed", "shorts", "live"})
_INSTAGRAM_HOST = "instagram.com"
_INSTAGRAM_PATH_KINDS = frozenset({"p", "reel", "tv"})

_DEFAULT_PORTS = {"http": 80, "https": 443}


@dataclass(frozen=True)
class VideoRef:
    """Platform and platform-specific id of a video."""

    platform: Platform
    video_id: str

    @property
    def embed_url(self) -> str:
        if self.platform is Platform.YOUTUBE:
            return f"https://www.youtube.com/embed/{self.video_id}"
        return f"https://www.instagram.com/p/{self.video_id}/embed"

    @property
    def thumbnail_url(self) -> str:
        if self.platform is Platform.YOUTUBE:
            return f"https://img.youtube.com/vi/{self.video_id}/maxresdefault.jpg"
        return f"https://www.instagram.com/p/{self.video_id}/media/?size=l"


def _valid_id(candidate: str) -> str | None:
    return candidate if _VIDEO_ID_RE.fullmatch(candidate) else None


def _youtube_id(host: str, segments: list[str], query: str) -> str | None:
    if host == _YOUTUBE_SHORT_HOST:
        return _valid_id(segments[0]) if segments else None
    if host not in _YOUTUBE_HOSTS or not segments:
        return None
    if segments[0] == "watch":
        values = parse_qs(query).get("v")
        return _valid_id(values[0]) if values else None
    if segments[0] in _YOUTUBE_PATH_KINDS and len(segments) > 1:
        return _valid_id(segments[1])
    return None


def _instagram_id(host: str, segments: list[str]) -> str | None:
    if host != _INSTAGRAM_HOST or len(segments) < 2:
        return None
    if segments[0] not in _INSTAGRAM_PATH_KINDS:
        return None
    return _valid_id(segments[1])


def extract_video(url: str) -> VideoRef:
    """Classify ``url`` by its host and extract the video id.

    Scheme-less input such as ``youtu.be/<id>`` is read as ``https``. For
    ``watch`` URLs the first ``v`` query parameter wins.

    Raises:
        UnrecognizedUrl: If the URL matches no supported platform.
    """
    candidate = (url or "").strip()
    try:
        parts = urlsplit(candidate if "://" in candidate else f"https://{candidate}")
    except ValueError as exc:
        raise UnrecognizedUrl(candidate) from exc
    host = (parts.hostname or "").removeprefix("www.")
    segments = [segment for segment in parts.path.split("/") if segment]

    video_id = _youtube_id(host, segments, parts.query)
    if video_id:
        return VideoRef(Platform.YOUTUBE, video_id)
    video_id = _instagram_id(host, segments)
    if video_id:
        return VideoRef(Platform.INSTAGRAM, video_id)
    raise UnrecognizedUrl(candidate)


def canonicalize_url(url: str) -> str:
    """Return a normalized form of an arbitrary URL.

    Lower-cases scheme and host, drops ``www.``, default ports and the
    fragment, sorts query parameters and trims a trailing slash.
    """
    parts = urlsplit(url.strip())
    scheme = (parts.scheme or "https").lower()
    host = (parts.hostname or "").lower()
    if host.startswith("www."):
        host = host[4:]
    netloc = host
    if parts.port is not None and parts.port != _DEFAULT_PORTS.get(scheme):
        netloc = f"{host}:{parts.port}"
    path = parts.path.rstrip("/") or ""
    query = urlencode(sorted(parse_qsl(parts.query, keep_blank_values=True)))
    return urlunsplit((scheme, netloc, path, query, ""))


def _digest(value: str) -> str:
    return blake3(value.encode("utf-8")).hexdigest()


def fingerprint(url: str, mode: FingerprintMode = "canonical") -> str:
    """Return the duplicate-detection fingerprint of ``url``.

    In ``canonical`` mode a recognised video is keyed by platform and id;
    other URLs are keyed by :func:`canonicalize_url`. ``legacy`` mode keys
    on the raw URL text, so only byte-identical URLs collide.
    """
    raw = (url or "").strip()
    if mode == "legacy":
        return _digest(raw)
    try:
        ref = extract_video(raw)
    except UnrecognizedUrl:
        return _digest(canonicalize_url(raw))
    return _digest(f"{ref.platform.value}:{ref.video_id}")


class ExistingPost(Protocol):
    id: int
    title: str


class PostLookup(Protocol):
    """Post store capability used by :class:`SubmissionGuard`."""

    def find_by_fingerprint(self, fingerprint: str) -> ExistingPost | None: ...


@dataclass(frozen=True)
class Unique:
    """No post carries this fingerprint yet; the submission may proceed."""

    fingerprint: str
    video: VideoRef
    is_duplicate: Literal[False] = False


@dataclass(frozen=True)
class Duplicate:
    """The video was already submitted; the caller should redirect to it."""

    fingerprint: str
    video: VideoRef
    existing_post_id: int
    existing_title: str
    is_duplicate: Literal[True] = True


class SubmissionGuard:
    """Pre-submission duplicate check against a post store.

    The check is a fast path only: the store's unique constraint on the
    fingerprint decides races between concurrent submissions.
    """

    def __init__(self, lookup: PostLookup, *, mode: FingerprintMode = "canonical") -> None:
        self.lookup = lookup
        self.mode = mode

    def check_duplicate(self, raw_url: str) -> Unique | Duplicate:
        """Return whether ``raw_url`` was already submitted.

        Raises:
            UnrecognizedUrl: If the URL is not a supported video link.
        """
        video = extract_video(raw_url)
        fp = fingerprint(raw_url, self.mode)
        existing = self.lookup.find_by_fingerprint(fp)
        if existing is None:
            return Unique(fingerprint=fp, video=video)
        return Duplicate(
            fingerprint=fp,
            video=video,
            existing_post_id=existing.id,
            existing_title=existing.title,
        )
