"""Encodes puzzles into shareable link payloads and back.

Wire format: compact JSON ``{"w": int, "h": int, "t": [int, ...],
"b": [str, ...]}`` (``b`` optional), then URL-safe base64 with the ``=``
padding stripped so the payload can sit in a query string unescaped.
"""

from __future__ import annotations

import base64
import binascii
import json
import re
from typing import Any
from urllib.parse import parse_qs, urlsplit, urlunsplit

from backend.errors import DecodeError, DecodeFailure
from backend.models.board import DEFAULT_HEIGHT, DEFAULT_WIDTH, PuzzleConfig
from backend.models.resources import has_any, normalize_background, sanitize_backgrounds

PARAM_NAME = "p"

_INTEGER = re.compile(r"-?[0-9]+")


class PuzzleCodec:
    """Stateless codec — all methods are static."""

    @staticmethod
    def encode(config: PuzzleConfig) -> str:
        """Return the payload for *config*. Tiles are trusted as given."""
        payload: dict[str, Any] = {
            "w": config.width,
            "h": config.height,
            "t": list(config.tiles),
        }
        if config.backgrounds is not None:
            backgrounds = sanitize_backgrounds(config.backgrounds, config.size)
            if has_any(backgrounds):
                payload["b"] = backgrounds

        text = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
        return _to_url_safe_base64(text.encode("utf-8"))

    @staticmethod
    def decode(payload: str) -> PuzzleConfig:
        """Parse *payload*, raising ``DecodeError`` on anything suspicious."""
        data = _parse_payload(payload)

        w, h = data.get("w"), data.get("h")
        if not _is_int(w) or not _is_int(h) or w <= 0 or h <= 0:
            raise DecodeError(DecodeFailure.INVALID_DIMENSIONS, f"w={w!r}, h={h!r}")

        expected = w * h
        tiles = data.get("t")
        if not isinstance(tiles, list) or len(tiles) != expected:
            raise DecodeError(
                DecodeFailure.TILE_COUNT_MISMATCH, f"expected {expected} tiles"
            )

        numeric = [_coerce_tile(v) for v in tiles]
        if None in numeric or set(numeric) != set(range(expected)):
            raise DecodeError(
                DecodeFailure.INVALID_PERMUTATION,
                f"tiles must be each of 0..{expected - 1} exactly once",
            )

        backgrounds: list[str] | None = None
        raw_backgrounds = data.get("b")
        if raw_backgrounds is not None:
            if not isinstance(raw_backgrounds, list) or len(raw_backgrounds) != expected:
                raise DecodeError(
                    DecodeFailure.BACKGROUND_COUNT_MISMATCH,
                    f"expected {expected} backgrounds",
                )
            normalized = [normalize_background(v) for v in raw_backgrounds]
            if has_any(normalized):
                backgrounds = normalized

        return PuzzleConfig(width=w, height=h, tiles=numeric, backgrounds=backgrounds)

    # -- links ----------------------------------------------------------------

    @staticmethod
    def build_link(base_url: str, payload: str) -> str:
        """Attach *payload* to *base_url* as ``?p=...``.

        Any existing query or fragment on *base_url* is dropped.
        """
        parts = urlsplit(base_url)
        path = parts.path if parts.path.endswith("/") else f"{parts.path}/"
        base = urlunsplit((parts.scheme, parts.netloc, path, "", ""))
        return f"{base}?{PARAM_NAME}={payload}"

    @staticmethod
    def payload_from_link(link: str) -> str | None:
        """Extract the payload from a link, or accept a bare payload."""
        link = link.strip()
        if not link:
            return None
        if "?" not in link and "/" not in link:
            return link
        values = parse_qs(urlsplit(link).query).get(PARAM_NAME)
        if not values or not values[0]:
            return None
        return values[0]

    @staticmethod
    def read_link(link: str | None) -> PuzzleConfig | None:
        """Decode the puzzle carried by *link*; None if absent.

        ``DecodeError`` propagates so the caller can report it before
        falling back.
        """
        if link is None:
            return None
        payload = PuzzleCodec.payload_from_link(link)
        if payload is None:
            return None
        return PuzzleCodec.decode(payload)

    @staticmethod
    def default_puzzle() -> PuzzleConfig:
        total = DEFAULT_WIDTH * DEFAULT_HEIGHT
        return PuzzleConfig(
            width=DEFAULT_WIDTH,
            height=DEFAULT_HEIGHT,
            tiles=list(range(1, total)) + [0],
        )


# -- helpers ------------------------------------------------------------------


def _to_url_safe_base64(raw: bytes) -> str:
    text = base64.b64encode(raw).decode("ascii")
    return text.replace("+", "-").replace("/", "_").rstrip("=")


def _parse_payload(payload: str) -> dict[str, Any]:
    if not isinstance(payload, str):
        raise DecodeError(DecodeFailure.MALFORMED_PAYLOAD, "payload must be text")
    normalized = payload.replace("-", "+").replace("_", "/")
    padded = normalized + "=" * (-len(normalized) % 4)
    try:
        raw = base64.b64decode(padded, validate=True)
        data = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, ValueError, RecursionError) as exc:
        raise DecodeError(DecodeFailure.MALFORMED_PAYLOAD, str(exc)) from exc
    if not isinstance(data, dict):
        raise DecodeError(DecodeFailure.MALFORMED_PAYLOAD, "expected a JSON object")
    return data


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _coerce_tile(value: Any) -> int | None:
    if _is_int(value):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and _INTEGER.fullmatch(value.strip()):
        return int(value.strip())
    return None
