"""
MIME structure helpers and the multipart walker.

Parts are sliced out of the raw bytes on demand and discarded once
inspected; no message tree is kept. Nesting is followed depth-first with
an explicit stack and capped at ``MAX_MULTIPART_DEPTH``.
"""

from __future__ import annotations

from dataclasses import dataclass
from email import errors, policy
from email.parser import BytesHeaderParser
from typing import List, Optional, Tuple

from mailtext.config import get_settings
from mailtext.email.config import (
    HEADER_BODY_SEPARATORS,
    HEADER_LINE_RE,
    MULTIPART_PREFIX,
    TEXT_HTML,
    TEXT_PLAIN,
)
from mailtext.email.content_cleaner import ContentCleaner
from mailtext.email.transfer_encoding import TransferEncodingDecoder
from mailtext.logger import get_logger

logger = get_logger(__name__)

_PARSE_ERRORS = (errors.MessageError, ValueError, TypeError, IndexError, LookupError)


@dataclass(frozen=True)
class MimePart:
    """Header summary plus raw (still transfer-encoded) body of one entity."""

    content_type: str
    has_content_type: bool
    encoding: str
    charset: Optional[str]
    boundary: Optional[str]
    disposition: Optional[str]
    body: bytes

    @property
    def is_multipart(self) -> bool:
        return self.content_type.startswith(MULTIPART_PREFIX)

    @property
    def is_attachment(self) -> bool:
        return self.disposition == "attachment"

    def decode_text(self) -> str:
        """Transport-decode, transfer-decode and charset-decode the body."""
        data = TransferEncodingDecoder.transport_decode(self.body, self.encoding)
        return TransferEncodingDecoder.decode_body(data, self.encoding, self.charset)


# ----------------------------------------------------------------------
# Entity parsing
# ----------------------------------------------------------------------

def split_header_body(raw: bytes) -> Tuple[bytes, bytes]:
    """Split an entity at the first blank line.

    An entity that starts with a blank line has no headers; one without a
    blank line is all headers.
    """
    for lead in (b"\r\n", b"\n"):
        if raw.startswith(lead):
            return b"", raw[len(lead):]

    best: Optional[Tuple[int, bytes]] = None
    for sep in HEADER_BODY_SEPARATORS:
        idx = raw.find(sep)
        if idx != -1 and (best is None or idx < best[0]):
            best = (idx, sep)
    if best is None:
        return raw, b""
    idx, sep = best
    return raw[:idx], raw[idx + len(sep):]


def parse_entity(raw: bytes, require_headers: bool = False) -> Optional[MimePart]:
    """Parse the header block of *raw* into a :class:`MimePart`.

    With *require_headers* the first line must be a ``Name: value`` header;
    otherwise *None* is returned. *None* is also returned when the header
    block cannot be parsed at all.
    """
    header_bytes, body = split_header_body(raw)
    if require_headers and not HEADER_LINE_RE.match(header_bytes):
        return None
    try:
        msg = BytesHeaderParser(policy=policy.default).parsebytes(header_bytes)
        return MimePart(
            content_type=msg.get_content_type(),
            has_content_type="Content-Type" in msg,
            encoding=TransferEncodingDecoder.normalize_name(str(msg.get("Content-Transfer-Encoding", ""))),
            charset=msg.get_content_charset(),
            boundary=msg.get_boundary(),
            disposition=msg.get_content_disposition(),
            body=body,
        )
    except _PARSE_ERRORS as exc:
        logger.debug("Unparseable header block: %s", exc)
        return None


# ----------------------------------------------------------------------
# Multipart walking
# ----------------------------------------------------------------------

class MultipartWalker:
    """Locate the best textual leaf inside a multipart body."""

    @staticmethod
    def split_parts(body: bytes, boundary: str) -> List[bytes]:
        """Slice *body* into the raw parts delimited by ``--boundary``.

        The preamble and epilogue are dropped. A body with no closing
        ``--boundary--`` keeps everything after the last delimiter.
        """
        delimiter = b"--" + boundary.encode("utf-8", errors="surrogateescape")
        closing = delimiter + b"--"

        parts: List[bytes] = []
        current: Optional[List[bytes]] = None
        for line in body.splitlines(keepends=True):
            marker = line.rstrip()
            if marker == closing:
                if current is not None:
                    parts.append(b"".join(current))
                current = None
                break
            if marker == delimiter:
                if current is not None:
                    parts.append(b"".join(current))
                current = []
                continue
            if current is not None:
                current.append(line)
        if current is not None:
            parts.append(b"".join(current))

        # The line break before a delimiter belongs to the delimiter
        trimmed: List[bytes] = []
        for part in parts:
            if part.endswith(b"\r\n"):
                part = part[:-2]
            elif part.endswith(b"\n") or part.endswith(b"\r"):
                part = part[:-1]
            trimmed.append(part)
        return trimmed

    @classmethod
    def extract(cls, body: bytes, boundary: Optional[str]) -> str:
        """Return the decoded text of the best part under *boundary*.

        The first non-blank ``text/plain`` leaf in depth-first order wins;
        otherwise the first ``text/html`` leaf, reduced to text. Returns
        ``""`` when the boundary is empty or no textual leaf exists.
        """
        if not boundary:
            return ""

        max_depth = get_settings().MAX_MULTIPART_DEPTH
        html_part: Optional[MimePart] = None
        stack = [(raw, 1) for raw in reversed(cls.split_parts(body, boundary))]

        while stack:
            raw, depth = stack.pop()
            part = parse_entity(raw)
            if part is None or part.is_attachment:
                continue

            if part.is_multipart:
                if depth >= max_depth:
                    logger.debug("Multipart nesting deeper than %d skipped", max_depth)
                    continue
                if not part.boundary:
                    continue
                children = cls.split_parts(part.body, part.boundary)
                stack.extend((child, depth + 1) for child in reversed(children))
                continue

            if part.content_type == TEXT_PLAIN:
                text = part.decode_text()
                if text.strip():
                    return text
            elif part.content_type == TEXT_HTML and html_part is None:
                html_part = part

        if html_part is not None:
            return ContentCleaner.strip_html_to_text(html_part.decode_text())
        return ""


def extract_multipart(body: bytes, boundary: Optional[str]) -> str:
    return MultipartWalker.extract(body, boundary)
