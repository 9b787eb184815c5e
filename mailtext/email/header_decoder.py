"""
RFC 2047 header decoding.

Resolves ``=?charset?B|Q?data?=`` encoded words inside header values
(subjects, display names). Text outside encoded words is passed through
untouched and a word that cannot be decoded is left exactly as written.
"""

from __future__ import annotations

import base64
import binascii
import quopri
from typing import List, Optional

from mailtext.email.config import ENCODED_WORD_GAP_RE, ENCODED_WORD_RE
from mailtext.logger import get_logger

logger = get_logger(__name__)


class HeaderDecoder:
    """Stateless decoder for encoded-word header values."""

    @staticmethod
    def decode_word(charset: str, encoding: str, data: str) -> Optional[str]:
        """Decode the payload of one encoded word.

        Returns *None* when the payload, the charset or the resulting bytes
        are invalid, so the caller can keep the original text.
        """
        # RFC 2231 language suffix: "utf-8*en"
        charset = charset.split("*", 1)[0]
        try:
            if encoding.upper() == "B":
                padded = data + "=" * (-len(data) % 4)
                raw = base64.b64decode(padded, validate=True)
            else:
                raw = quopri.decodestring(data.encode("ascii"), header=True)
            return raw.decode(charset)
        except (binascii.Error, LookupError, ValueError) as exc:
            logger.debug("Encoded word left undecoded (%s?%s): %s", charset, encoding, exc)
            return None

    @classmethod
    def decode(cls, value: Optional[str]) -> str:
        """Return *value* with every encoded word resolved.

        Whitespace between two successfully decoded, adjacent encoded words
        is dropped; all other text is kept as-is.
        """
        if not value:
            return ""
        if "=?" not in value:
            return value

        out: List[str] = []
        pos = 0
        prev_decoded = False
        for match in ENCODED_WORD_RE.finditer(value):
            gap = value[pos:match.start()]
            decoded = cls.decode_word(match.group(1), match.group(2), match.group(3))
            if decoded is None:
                out.append(gap)
                out.append(match.group(0))
                prev_decoded = False
            else:
                if not (prev_decoded and ENCODED_WORD_GAP_RE.match(gap)):
                    out.append(gap)
                out.append(decoded)
                prev_decoded = True
            pos = match.end()
        out.append(value[pos:])
        return "".join(out)


def decode_header_text(value: Optional[str]) -> str:
    """Module-level shortcut for :meth:`HeaderDecoder.decode`."""
    return HeaderDecoder.decode(value)
