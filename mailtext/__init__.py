"""
mailtext: turn raw wire-format email into display-ready text.

Every function below is pure and returns a string (or record) for any
input; decoding problems degrade to best-effort output instead of raising.
"""

from mailtext.email.address import (
    format_address,
    format_address_email_only,
    parse_address,
    parse_address_list,
)
from mailtext.email.content_cleaner import normalize_body, strip_html
from mailtext.email.date_formatter import format_relative_time, parse_email_header_date
from mailtext.email.email_parser import extract_text_body, read_message
from mailtext.email.header_decoder import decode_header_text
from mailtext.email.multipart import extract_multipart
from mailtext.email.transfer_encoding import decode_body
from mailtext.ir import Address, MessageRecord

__version__ = "0.1.0"

__all__ = [
    "Address",
    "MessageRecord",
    "decode_body",
    "decode_header_text",
    "extract_multipart",
    "extract_text_body",
    "format_address",
    "format_address_email_only",
    "format_relative_time",
    "normalize_body",
    "parse_address",
    "parse_address_list",
    "parse_email_header_date",
    "read_message",
    "strip_html",
]
