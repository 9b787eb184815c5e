"""
Intermediate representation module
==================================

Data models passed between the header/address/date leaves and the
display-record reader. All instances are created per decode call and
never shared.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class Address(BaseModel):
    """
    A structured mail address.

    Attributes:
        name: display name, already decoded; ``""`` when absent
        mailbox: local part (before ``@``)
        host: domain (after ``@``)
    """
    name: str = ""
    mailbox: str = ""
    host: str = ""

    class Config:
        frozen = True

    @property
    def is_complete(self) -> bool:
        """True when both mailbox and host are present."""
        return bool(self.mailbox) and bool(self.host)


class MessageRecord(BaseModel):
    """
    Display-ready view of one raw message.

    Attributes:
        sender: full display form of the first From address
        sender_email: email-only form of the same address
        recipients: full display forms of the To addresses
        cc: full display forms of the Cc addresses
        subject: decoded Subject header
        date: parsed Date header, None when missing or unparseable
        date_display: relative form of ``date``
        message_id: raw Message-ID header value
        body: plain-text body
        body_truncated: whether ``body`` was cut to the configured limit
    """
    sender: str = ""
    sender_email: str = ""
    recipients: List[str] = []
    cc: List[str] = []
    subject: str = ""
    date: Optional[datetime] = None
    date_display: str = ""
    message_id: str = ""
    body: str = ""
    body_truncated: bool = False
