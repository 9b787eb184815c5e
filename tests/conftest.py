"""
Pytest configuration and shared fixtures.
"""
import os
import sys
from datetime import datetime

import pytest

# Add project root to path for imports
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from mailtext.config import reset_settings


def crlf(*lines):
    """Join *lines* with CRLF, the way messages arrive on the wire."""
    return "\r\n".join(lines).encode("utf-8")


@pytest.fixture(autouse=True)
def fresh_settings():
    """Re-read settings around each test so env overrides do not leak."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def fixed_now():
    """Wednesday 2024-03-20 15:00, naive local time."""
    return datetime(2024, 3, 20, 15, 0)


@pytest.fixture
def multipart_alternative_message():
    """multipart/alternative with both a plain and an HTML version."""
    return crlf(
        "Content-Type: multipart/alternative; boundary=boundary123",
        "",
        "--boundary123",
        "Content-Type: text/plain",
        "",
        "Plain text version",
        "--boundary123",
        "Content-Type: text/html",
        "",
        "<p>HTML version</p>",
        "--boundary123--",
        "",
    )


@pytest.fixture
def nested_mixed_message():
    """multipart/mixed wrapping an alternative part and an attachment."""
    return crlf(
        "From: =?UTF-8?Q?Jos=C3=A9_P=C3=A9rez?= <jose@example.com>",
        "To: Jane <jane@example.org>, bob@example.net",
        "Cc: carol@example.com",
        "Subject: =?UTF-8?Q?Weekly_report_=E2=9C=93?=",
        "Date: Mon, 15 Jan 2024 10:00:00 +0000",
        "Message-ID: <abc123@example.com>",
        "MIME-Version: 1.0",
        'Content-Type: multipart/mixed; boundary="outer"',
        "",
        "This is a multi-part message in MIME format.",
        "--outer",
        'Content-Type: multipart/alternative; boundary="inner"',
        "",
        "--inner",
        "Content-Type: text/plain; charset=utf-8",
        "Content-Transfer-Encoding: quoted-printable",
        "",
        "Caf=C3=A9 numbers are in.",
        "",
        "",
        "",
        "",
        "See attachment.",
        "--inner",
        "Content-Type: text/html; charset=utf-8",
        "",
        "<p>Caf&eacute; numbers are in.</p>",
        "--inner--",
        "--outer",
        "Content-Type: text/plain; name=report.txt",
        "Content-Disposition: attachment; filename=report.txt",
        "",
        "attachment body",
        "--outer--",
        "",
    )
