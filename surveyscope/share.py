"""Share tokens: an analysis result packed into a URL fragment.

Pipeline (encode):  compact JSON → zlib deflate → base64 → URL-safe alphabet
(``+``→``-``, ``/``→``_``) with the ``=`` padding stripped.  Decoding runs the
same steps backwards.  The tokens are interchangeable with links produced by
the browser app, which deflates with zlib framing; raw-deflate payloads
(no zlib header) are accepted on decode too.

Every decode failure surfaces as ``CorruptShareToken`` so callers can show a
single "invalid or corrupted link" message.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import zlib
from urllib.parse import urldefrag, urlsplit

from surveyscope.errors import CorruptShareToken, MalformedResult
from surveyscope.models import AnalysisResult

logger = logging.getLogger(__name__)

_ZLIB_WBITS = 15
_RAW_WBITS = -15

# Browsers and chat clients start truncating somewhere past this.
DEFAULT_URL_WARN_LENGTH = 8000


def encode_result(result: AnalysisResult) -> str:
    """Encode a full (unfiltered) result as a URL-safe token."""
    payload = json.dumps(result.to_wire(), ensure_ascii=False, separators=(",", ":"))
    compressed = zlib.compress(payload.encode("utf-8"))
    token = base64.b64encode(compressed).decode("ascii")
    token = token.replace("+", "-").replace("/", "_").rstrip("=")
    logger.debug(
        "Encoded share token: %d bytes JSON → %d chars", len(payload), len(token)
    )
    return token


def decode_token(token: str) -> AnalysisResult:
    """Decode a token produced by ``encode_result()``.

    A leading ``#`` (as read from ``location.hash``) and surrounding
    whitespace are ignored.

    Raises:
        CorruptShareToken: if any stage of the decode fails.
    """
    cleaned = token.strip().removeprefix("#")
    if not cleaned:
        raise CorruptShareToken("empty token")

    padded = cleaned + "=" * (-len(cleaned) % 4)
    standard = padded.replace("-", "+").replace("_", "/")
    try:
        compressed = base64.b64decode(standard, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise CorruptShareToken(f"base64 decode failed: {exc}") from exc

    try:
        raw = _inflate(compressed)
    except zlib.error as exc:
        raise CorruptShareToken(f"decompression failed: {exc}") from exc

    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise CorruptShareToken(f"payload is not JSON: {exc}") from exc

    try:
        return AnalysisResult.from_wire(data)
    except MalformedResult as exc:
        raise CorruptShareToken(f"payload is not an analysis result: {exc}") from exc


def _inflate(data: bytes) -> bytes:
    """Inflate exactly one complete deflate stream; trailing bytes are an error."""
    wbits = _ZLIB_WBITS if _has_zlib_header(data) else _RAW_WBITS
    inflater = zlib.decompressobj(wbits)
    raw = inflater.decompress(data)
    if not inflater.eof:
        raise zlib.error("incomplete or truncated stream")
    if inflater.unused_data:
        raise zlib.error(f"{len(inflater.unused_data)} trailing byte(s) after stream")
    return raw


def _has_zlib_header(data: bytes) -> bool:
    """Check for a deflate CMF/FLG pair (RFC 1950 §2.2)."""
    if len(data) < 2:
        return False
    cmf, flg = data[0], data[1]
    return cmf & 0x0F == 8 and (cmf << 8 | flg) % 31 == 0


def build_share_url(
    base_url: str,
    result: AnalysisResult,
    *,
    warn_length: int = DEFAULT_URL_WARN_LENGTH,
) -> str:
    """Return ``base_url`` with its fragment replaced by the result's token."""
    base, _ = urldefrag(base_url)
    url = f"{base}#{encode_result(result)}"
    if len(url) > warn_length:
        logger.warning(
            "Share URL is %d characters; some browsers and apps may truncate it",
            len(url),
        )
    return url


def token_from_url(url: str) -> str:
    """Extract the token from a share URL's fragment."""
    fragment = urlsplit(url.strip()).fragment
    if not fragment:
        raise CorruptShareToken("URL has no fragment")
    return fragment
