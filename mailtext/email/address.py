"""
Mail address parsing and rendering.

Two renderings are offered:
- full display form: ``Name <mailbox@host>`` or ``mailbox@host``
- email-only form:   ``mailbox@host``, empty when either half is missing
"""

from __future__ import annotations

from email.utils import getaddresses
from typing import List, Optional

from mailtext.email.header_decoder import HeaderDecoder
from mailtext.ir import Address


class AddressFormatter:
    """Stateless helpers around :class:`mailtext.ir.Address`."""

    @staticmethod
    def format_address(addr: Optional[Address]) -> str:
        """Render *addr* for display; ``""`` for a missing or empty address.

        A partial address renders only the halves it has, never a dangling
        ``@``; with neither half only the display name is left.
        """
        if addr is None:
            return ""
        email_part = "@".join(part for part in (addr.mailbox, addr.host) if part)
        if not email_part:
            return addr.name
        if addr.name:
            return f"{addr.name} <{email_part}>"
        return email_part

    @staticmethod
    def format_email_only(addr: Optional[Address]) -> str:
        """Render just ``mailbox@host``; ``""`` unless both halves are present."""
        if addr is None or not addr.is_complete:
            return ""
        return f"{addr.mailbox}@{addr.host}"

    @staticmethod
    def parse_address_list(header_value: Optional[str]) -> List[Address]:
        """Parse a raw From/To/Cc header value into addresses.

        Display names are decoded with :class:`HeaderDecoder`. Entries
        without an address part are dropped.
        """
        if not header_value:
            return []
        try:
            pairs = getaddresses([header_value])
        except (TypeError, ValueError, IndexError):
            return []

        addresses: List[Address] = []
        for name, addr_spec in pairs:
            addr_spec = addr_spec.strip()
            if not addr_spec:
                continue
            mailbox, _, host = addr_spec.rpartition("@")
            if not mailbox:
                # No "@": keep the bare token as the mailbox
                mailbox, host = host, ""
            addresses.append(
                Address(name=HeaderDecoder.decode(name).strip(), mailbox=mailbox, host=host)
            )
        return addresses

    @classmethod
    def parse_address(cls, header_value: Optional[str]) -> Optional[Address]:
        """Return the first address in *header_value*, or *None*."""
        addresses = cls.parse_address_list(header_value)
        return addresses[0] if addresses else None


def format_address(addr: Optional[Address]) -> str:
    return AddressFormatter.format_address(addr)


def format_address_email_only(addr: Optional[Address]) -> str:
    return AddressFormatter.format_email_only(addr)


def parse_address(header_value: Optional[str]) -> Optional[Address]:
    return AddressFormatter.parse_address(header_value)


def parse_address_list(header_value: Optional[str]) -> List[Address]:
    return AddressFormatter.parse_address_list(header_value)
