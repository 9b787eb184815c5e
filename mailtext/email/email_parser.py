"""
Message-level decoding: raw bytes in, display text out.

``extract_text_body`` runs an ordered chain of attempts, each returning
``""`` for "no result":

1. structured parse + dispatch on the top-level Content-Type
   (``text/plain``, ``text/html``, ``multipart/*``)
2. raw-text cleanup of the whole input

``read_message`` builds a :class:`mailtext.ir.MessageRecord` from the
headers and the extracted body.
"""

from __future__ import annotations

from datetime import datetime
from email import errors, policy
from email.message import Message
from email.parser import HeaderParser
from typing import Optional, Union

from mailtext.config import get_settings
from mailtext.email.address import AddressFormatter
from mailtext.email.config import HEADER_LINE_RE, TEXT_HTML, TEXT_PLAIN
from mailtext.email.content_cleaner import ContentCleaner
from mailtext.email.date_formatter import RelativeTimeFormatter
from mailtext.email.header_decoder import HeaderDecoder
from mailtext.email.multipart import MultipartWalker, parse_entity, split_header_body
from mailtext.email.transfer_encoding import TransferEncodingDecoder
from mailtext.ir import MessageRecord
from mailtext.logger import get_logger

logger = get_logger(__name__)

RawMessage = Union[bytes, bytearray, memoryview, str]


def _as_bytes(raw: Optional[RawMessage]) -> bytes:
    if raw is None:
        return b""
    if isinstance(raw, str):
        return raw.encode("utf-8", errors="surrogateescape")
    if isinstance(raw, (bytes, bytearray, memoryview)):
        return bytes(raw)
    raise TypeError(f"raw message must be bytes or str, not {type(raw).__name__}")


class EmailParser:
    """Turn raw wire-format messages into display-ready text."""

    # ------------------------------------------------------------------
    # Body extraction
    # ------------------------------------------------------------------

    @staticmethod
    def structured_text(raw: bytes) -> str:
        """Decode the body according to the top-level Content-Type.

        Returns ``""`` when the headers are unusable, the Content-Type is
        missing or not textual, or the selected part is empty.
        """
        top = parse_entity(raw, require_headers=True)
        if top is None or not top.has_content_type:
            return ""
        if top.is_multipart:
            return MultipartWalker.extract(top.body, top.boundary)
        if top.content_type == TEXT_PLAIN:
            return top.decode_text()
        if top.content_type == TEXT_HTML:
            return ContentCleaner.strip_html_to_text(top.decode_text())
        return ""

    @classmethod
    def extract_text_body(cls, raw: Optional[RawMessage]) -> str:
        """Return the normalised plain-text body of *raw*.

        Never raises: input that is not a parseable message is cleaned and
        returned as text.
        """
        data = _as_bytes(raw)
        if not data:
            return ""

        try:
            text = cls.structured_text(data)
        except Exception as exc:
            logger.debug("Structured body extraction failed: %s", exc, exc_info=True)
            text = ""

        if text.strip():
            return ContentCleaner.normalize_body(text)

        logger.debug("Body extraction: falling back to raw text (%d bytes)", len(data))
        return ContentCleaner.normalize_body(TransferEncodingDecoder.to_text(data))

    # ------------------------------------------------------------------
    # Headers
    # ------------------------------------------------------------------

    @staticmethod
    def decode_header_bytes(header_bytes: bytes) -> str:
        """Turn a raw header block into text.

        8-bit bytes are read as ``DEFAULT_CHARSET`` and, when that fails,
        as Latin-1, so unencoded non-ASCII headers survive intact.
        """
        fallback = get_settings().DEFAULT_CHARSET
        try:
            return header_bytes.decode(fallback)
        except (UnicodeDecodeError, LookupError):
            return header_bytes.decode("latin-1")

    @classmethod
    def parse_headers(cls, raw: bytes) -> Optional[Message]:
        """Parse the header block of *raw*, leaving encoded words intact."""
        header_bytes, _ = split_header_body(raw)
        if not HEADER_LINE_RE.match(header_bytes):
            return None
        try:
            return HeaderParser(policy=policy.compat32).parsestr(cls.decode_header_bytes(header_bytes))
        except (errors.MessageError, ValueError, TypeError, IndexError) as exc:
            logger.debug("Header block unparseable: %s", exc)
            return None

    @staticmethod
    def header_value(msg: Optional[Message], name: str) -> str:
        """Unfolded raw value of header *name*; ``""`` when absent."""
        if msg is None:
            return ""
        value = msg.get(name)
        if value is None:
            return ""
        return str(value).replace("\r\n", "").replace("\n", "").strip()

    # ------------------------------------------------------------------
    # Display record
    # ------------------------------------------------------------------

    @classmethod
    def read_message(cls, raw: Optional[RawMessage], now: Optional[datetime] = None) -> MessageRecord:
        """Build the display record for *raw*.

        Header fields of input without a usable header block stay empty;
        the body still goes through :meth:`extract_text_body`.
        """
        data = _as_bytes(raw)
        msg = cls.parse_headers(data) if data else None

        sender = AddressFormatter.parse_address(cls.header_value(msg, "From"))
        recipients = AddressFormatter.parse_address_list(cls.header_value(msg, "To"))
        cc = AddressFormatter.parse_address_list(cls.header_value(msg, "Cc"))
        date = RelativeTimeFormatter.parse_email_header_date(cls.header_value(msg, "Date"))

        body = cls.extract_text_body(data)
        max_chars = get_settings().MAX_BODY_CHARS
        truncated = len(body) > max_chars
        if truncated:
            body = body[:max_chars]

        return MessageRecord(
            sender=AddressFormatter.format_address(sender),
            sender_email=AddressFormatter.format_email_only(sender),
            recipients=[AddressFormatter.format_address(a) for a in recipients],
            cc=[AddressFormatter.format_address(a) for a in cc],
            subject=HeaderDecoder.decode(cls.header_value(msg, "Subject")),
            date=date,
            date_display=RelativeTimeFormatter.format(date, now),
            message_id=cls.header_value(msg, "Message-ID"),
            body=body,
            body_truncated=truncated,
        )


def extract_text_body(raw: Optional[RawMessage]) -> str:
    return EmailParser.extract_text_body(raw)


def read_message(raw: Optional[RawMessage], now: Optional[datetime] = None) -> MessageRecord:
    return EmailParser.read_message(raw, now)
