"""
Unit tests for MIME splitting and part selection in mailtext.email.multipart.
"""
from mailtext import extract_multipart
from mailtext.email.multipart import MultipartWalker, parse_entity, split_header_body

from conftest import crlf


class TestSplitting:
    """Tests for header/body and boundary splitting."""

    def test_split_header_body_crlf(self):
        """Test the CRLF blank-line separator."""
        assert split_header_body(b"A: 1\r\n\r\nbody") == (b"A: 1", b"body")

    def test_split_header_body_lf(self):
        """Test the bare LF blank-line separator."""
        assert split_header_body(b"A: 1\n\nbody\n\nmore") == (b"A: 1", b"body\n\nmore")

    def test_entity_without_headers(self):
        """Test an entity that starts with a blank line."""
        assert split_header_body(b"\r\nbody") == (b"", b"body")

    def test_split_parts_drops_preamble_and_epilogue(self):
        """Test that only delimited parts are returned."""
        body = crlf("preamble", "--b", "one", "--b", "two", "--b--", "epilogue")
        assert MultipartWalker.split_parts(body, "b") == [b"one", b"two"]

    def test_split_parts_without_closing_delimiter(self):
        """Test that a truncated body keeps its last part."""
        body = crlf("--b", "one", "--b", "two")
        assert MultipartWalker.split_parts(body, "b") == [b"one", b"two"]

    def test_part_defaults_to_text_plain(self):
        """Test that a part without headers is text/plain."""
        part = parse_entity(b"\r\nhello")
        assert part is not None
        assert part.content_type == "text/plain"
        assert part.has_content_type is False
        assert part.body == b"hello"


class TestSelection:
    """Tests for choosing the best textual part."""

    def test_empty_boundary(self):
        """Test that an empty boundary short-circuits."""
        assert extract_multipart(b"", "") == ""
        assert extract_multipart(b"--x\r\n\r\ntext", None) == ""

    def test_prefers_plain_over_html(self):
        """Test that text/plain wins even when HTML comes first."""
        body = crlf(
            "--b",
            "Content-Type: text/html",
            "",
            "<p>HTML version</p>",
            "--b",
            "Content-Type: text/plain",
            "",
            "Plain version",
            "--b--",
        )
        assert extract_multipart(body, "b") == "Plain version"

    def test_html_fallback_is_reduced(self):
        """Test that an HTML-only body is reduced to text."""
        body = crlf("--b", "Content-Type: text/html", "", "<p>Only &amp; HTML</p>", "--b--")
        assert extract_multipart(body, "b") == "Only & HTML"

    def test_recurses_into_nested_multipart(self):
        """Test descent into a nested part with its own boundary."""
        body = crlf(
            "--outer",
            'Content-Type: multipart/alternative; boundary="inner"',
            "",
            "--inner",
            "Content-Type: text/plain",
            "",
            "Nested plain",
            "--inner--",
            "--outer",
            "Content-Type: text/plain",
            "",
            "Sibling plain",
            "--outer--",
        )
        assert extract_multipart(body, "outer") == "Nested plain"

    def test_quoted_printable_part(self):
        """Test that a part's own transfer encoding is applied."""
        body = crlf(
            "--b",
            "Content-Type: text/plain; charset=utf-8",
            "Content-Transfer-Encoding: quoted-printable",
            "",
            "Caf=C3=A9=20ok",
            "--b--",
        )
        assert extract_multipart(body, "b") == "Café ok"

    def test_base64_part(self):
        """Test that base64 parts are decoded at the transport layer."""
        body = crlf(
            "--b",
            "Content-Type: text/plain",
            "Content-Transfer-Encoding: base64",
            "",
            "SGVsbG8gV29ybGQ=",
            "--b--",
        )
        assert extract_multipart(body, "b") == "Hello World"

    def test_attachment_skipped(self):
        """Test that text attachments are not taken as the body."""
        body = crlf(
            "--b",
            "Content-Type: text/plain",
            "Content-Disposition: attachment; filename=notes.txt",
            "",
            "attached notes",
            "--b",
            "Content-Type: text/html",
            "",
            "<b>Body</b>",
            "--b--",
        )
        assert extract_multipart(body, "b") == "Body"

    def test_blank_plain_part_skipped(self):
        """Test that a whitespace-only plain part does not hide the HTML part."""
        body = crlf(
            "--b",
            "Content-Type: text/plain",
            "",
            "   ",
            "--b",
            "Content-Type: text/html",
            "",
            "<p>Real content</p>",
            "--b--",
        )
        assert extract_multipart(body, "b") == "Real content"

    def test_no_text_parts(self):
        """Test that a body with no textual leaf yields an empty string."""
        body = crlf("--b", "Content-Type: image/png", "", "xxxx", "--b--")
        assert extract_multipart(body, "b") == ""

    def test_depth_limit(self, monkeypatch):
        """Test that nesting beyond the configured depth is not walked."""
        body = crlf(
            "--l1",
            'Content-Type: multipart/mixed; boundary="l2"',
            "",
            "--l2",
            "Content-Type: text/plain",
            "",
            "deep text",
            "--l2--",
            "--l1--",
        )
        assert extract_multipart(body, "l1") == "deep text"

        from mailtext.config import reset_settings

        monkeypatch.setenv("MAILTEXT_MAX_MULTIPART_DEPTH", "1")
        reset_settings()
        assert extract_multipart(body, "l1") == ""


class TestPartCharsets:
    """Part charsets that are not text codecs."""

    def test_non_text_codec_charset(self):
        """Test that a part declaring charset=rot13 is decoded with the default."""
        body = crlf("--b", "Content-Type: text/plain; charset=rot13", "", "Hello", "--b--")
        assert extract_multipart(body, "b") == "Hello"

    def test_html_part_with_hex_charset(self):
        """Test the HTML fallback with a bytes-to-bytes codec charset."""
        body = crlf("--b", "Content-Type: text/html; charset=hex", "", "<p>Hi</p>", "--b--")
        assert extract_multipart(body, "b") == "Hi"
