"""
Email decoding subpackage.

Public API:
- ``HeaderDecoder``          — RFC 2047 encoded-word decoding
- ``AddressFormatter``       — address parsing and rendering
- ``RelativeTimeFormatter``  — Date header parsing, relative display strings
- ``TransferEncodingDecoder``— quoted-printable / base64 body decoding
- ``ContentCleaner``         — HTML→text, body normalisation
- ``MultipartWalker``        — best textual leaf of a multipart body
- ``EmailParser``            — body extraction and display records
"""

from mailtext.email.address import AddressFormatter
from mailtext.email.content_cleaner import ContentCleaner
from mailtext.email.date_formatter import RelativeTimeFormatter
from mailtext.email.email_parser import EmailParser
from mailtext.email.header_decoder import HeaderDecoder
from mailtext.email.multipart import MultipartWalker
from mailtext.email.transfer_encoding import TransferEncodingDecoder

__all__ = [
    "AddressFormatter",
    "ContentCleaner",
    "EmailParser",
    "HeaderDecoder",
    "MultipartWalker",
    "RelativeTimeFormatter",
    "TransferEncodingDecoder",
]
