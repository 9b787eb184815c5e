"""
Content-transfer-encoding handling for body bytes.

Two layers:
- ``transport_decode``: undoes base64 before any text handling happens.
- ``decode_body``: reverses quoted-printable and turns bytes into text;
  every other encoding name is an identity transform.
"""

from __future__ import annotations

import base64
import binascii
import codecs
import quopri
from typing import Optional

from mailtext.config import get_settings
from mailtext.email.config import BASE64, QUOTED_PRINTABLE
from mailtext.logger import get_logger

logger = get_logger(__name__)


class TransferEncodingDecoder:
    """Stateless decoder for MIME body bytes."""

    @staticmethod
    def normalize_name(encoding: Optional[str]) -> str:
        """``" Quoted-Printable "`` -> ``"quoted-printable"``."""
        return (encoding or "").strip().lower()

    @staticmethod
    def is_text_charset(name: str) -> bool:
        """True when *name* is a codec that turns bytes into ``str``.

        ``codecs.lookup`` also knows bytes-to-bytes codecs such as ``hex``,
        ``base64`` or ``rot13``; those are not charsets.
        """
        try:
            info = codecs.lookup(name)
        except LookupError:
            return False
        return getattr(info, "_is_text_encoding", True)

    @classmethod
    def to_text(cls, data: bytes, charset: Optional[str] = None) -> str:
        """Decode *data* with *charset*, falling back to the default charset.

        Undecodable bytes become U+FFFD instead of failing. Latin-1 is the
        last resort since it maps every byte.
        """
        fallback = get_settings().DEFAULT_CHARSET
        name = (charset or "").strip().strip('"') or fallback
        if not cls.is_text_charset(name):
            logger.debug("Unknown charset %r, using %s", name, fallback)
            name = fallback

        for candidate in (name, fallback):
            try:
                return data.decode(candidate, errors="replace")
            except (LookupError, ValueError) as exc:
                # e.g. "idna" refuses any error handler but "strict"
                logger.debug("Charset %r failed: %s", candidate, exc)
        return data.decode("latin-1")

    @classmethod
    def transport_decode(cls, data: bytes, encoding: Optional[str]) -> bytes:
        """Undo base64 transport encoding; other encodings pass through.

        Invalid base64 leaves the bytes unchanged.
        """
        if cls.normalize_name(encoding) != BASE64:
            return data
        try:
            compact = b"".join(data.split())
            return base64.b64decode(compact + b"=" * (-len(compact) % 4))
        except (binascii.Error, ValueError) as exc:
            logger.debug("Base64 body left undecoded: %s", exc)
            return data

    @classmethod
    def decode_body(cls, body: bytes, encoding: Optional[str], charset: Optional[str] = None) -> str:
        """Reverse *encoding* on *body* and return text.

        Only ``quoted-printable`` (any case) is decoded here. Malformed
        escapes are kept literally, so the result is always best effort.
        """
        if cls.normalize_name(encoding) == QUOTED_PRINTABLE:
            try:
                body = quopri.decodestring(body)
            except (binascii.Error, ValueError) as exc:
                logger.debug("Quoted-printable body left undecoded: %s", exc)
        return cls.to_text(body, charset)


def decode_body(body: bytes, encoding: Optional[str], charset: Optional[str] = None) -> str:
    return TransferEncodingDecoder.decode_body(body, encoding, charset)
