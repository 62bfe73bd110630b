# -*- test-case-name: missive.test.test_header -*-
# Copyright (c) 2011-2021. See LICENSE for details.

"""
Tests for L{missive._header}.
"""

from copy import copy

from hypothesis import given
from hypothesis.strategies import binary, text

from .._header import (
    HEADER_NAME_ENCODING,
    HEADER_VALUE_ENCODING,
    HTTP_POLICY,
    MIME_POLICY,
    Header,
    MIMEHeader,
    WirePolicy,
    headerNameAsText,
    headerValueAsBytes,
    headerValueAsText,
)
from .._imessage import HeaderTooLong, IHeader
from ._strategies import header_names, header_values, latin1_text
from ._trial import TestCase


__all__ = ()


class EncodingTests(TestCase):
    """
    Tests for encoding support in L{missive._header}.
    """

    @given(binary())
    def test_headerNameAsTextWithBytes(self, name: bytes) -> None:
        """
        L{headerNameAsText} decodes L{bytes} using L{HEADER_NAME_ENCODING}.
        """
        self.assertEqual(
            headerNameAsText(name), name.decode(HEADER_NAME_ENCODING)
        )

    @given(text(min_size=1))
    def test_headerNameAsTextWithText(self, name: str) -> None:
        """
        L{headerNameAsText} passes through L{str}.
        """
        self.assertIdentical(headerNameAsText(name), name)

    @given(binary())
    def test_headerValueAsBytesWithBytes(self, value: bytes) -> None:
        """
        L{headerValueAsBytes} passes through L{bytes}.
        """
        self.assertIdentical(headerValueAsBytes(value), value)

    @given(latin1_text(min_size=1))
    def test_headerValueAsBytesWithText(self, value: str) -> None:
        """
        L{headerValueAsBytes} encodes L{str} using L{HEADER_VALUE_ENCODING}.
        """
        self.assertEqual(
            headerValueAsBytes(value), value.encode(HEADER_VALUE_ENCODING)
        )

    @given(binary())
    def test_headerValueAsTextWithBytes(self, value: bytes) -> None:
        """
        L{headerValueAsText} decodes L{bytes} using L{HEADER_VALUE_ENCODING}.
        """
        self.assertEqual(
            headerValueAsText(value), value.decode(HEADER_VALUE_ENCODING)
        )


class HeaderTests(TestCase):
    """
    Tests for L{Header}.
    """

    def test_interface(self) -> None:
        """
        L{Header} implements L{IHeader}.
        """
        self.assertProvides(IHeader, Header("Content-Type", "text/plain"))

    def test_scalar(self) -> None:
        """
        A scalar value is stored as a single value.
        """
        header = Header("Content-Type", "text/plain")

        self.assertEqual(header.name, "Content-Type")
        self.assertEqual(header.data(), ["text/plain"])
        self.assertEqual(header.value(), "text/plain")

    def test_number(self) -> None:
        """
        Numbers are stored as text.
        """
        self.assertEqual(Header("Content-Length", 42).value(), "42")

    def test_bytes(self) -> None:
        """
        Names and values given as L{bytes} are decoded as ISO-8859-1.
        """
        header = Header(b"X-Name", b"caf\xe9")

        self.assertEqual(header.name, "X-Name")
        self.assertEqual(header.value(), "caf\xe9")

    def test_splitOnCommas(self) -> None:
        """
        Values are split on commas, and rendered joined with C{", "}.
        """
        header = Header("Vary", "Accept-Encoding,Cookie , User-Agent")

        self.assertEqual(
            header.data(), ["Accept-Encoding", "Cookie", "User-Agent"]
        )
        self.assertEqual(header.value(), "Accept-Encoding, Cookie, User-Agent")

    def test_sequence(self) -> None:
        """
        A sequence of values is joined with commas before being split.
        """
        header = Header("Vary", ["Accept-Encoding", "Cookie, User-Agent"])

        self.assertEqual(
            header.data(), ["Accept-Encoding", "Cookie", "User-Agent"]
        )
        self.assertEqual(header.plain(), "Accept-Encoding, Cookie, User-Agent")

    def test_empty(self) -> None:
        """
        An empty value has no values.
        """
        header = Header("X-Empty", "")

        self.assertEqual(header.data(), [])
        self.assertEqual(header.value(), "")
        self.assertEqual(header.toHeader(), "X-Empty: ")

    def test_lineBreaksRemoved(self) -> None:
        """
        Line breaks are removed from values.
        """
        header = Header("X-Test", "a\r\nSet-Cookie: injected=1")

        self.assertEqual(header.value(), "aSet-Cookie: injected=1")
        self.assertEqual(header.toHeader(), "X-Test: aSet-Cookie: injected=1")

    def test_encodedLineBreaksRemoved(self) -> None:
        """
        Line breaks written as HTML character references are removed from
        values.
        """
        header = Header("X-Test", "a&#13;&#10;b")

        self.assertEqual(header.value(), "ab")

    def test_characterReferencesDecoded(self) -> None:
        """
        HTML character references are decoded.
        """
        self.assertEqual(Header("X-Test", "a &amp; b").value(), "a & b")

    def test_setCookieNotSplit(self) -> None:
        """
        C{Set-Cookie} values are not split on commas.
        """
        value = "a=b; Expires=Thu, 25 Dec 2014 00:00:00 GMT; Path=/"
        header = Header("Set-Cookie", value)

        self.assertEqual(header.data(), [value])
        self.assertEqual(header.value(), value)

    def test_setCookieSequence(self) -> None:
        """
        Each value of a C{Set-Cookie} header is rendered on its own line.
        """
        header = Header(
            "Set-Cookie", ["foo1=bar1; Path=/", "foo2=bar2; Path=/"]
        )

        self.assertEqual(
            header.value(),
            "foo1=bar1; Path=/\r\nSet-Cookie: foo2=bar2; Path=/",
        )
        self.assertEqual(
            header.toHeader(),
            "Set-Cookie: foo1=bar1; Path=/\r\nSet-Cookie: foo2=bar2; Path=/",
        )

    def test_setCookieAppend(self) -> None:
        """
        Appending to a C{Set-Cookie} header adds a line rather than a comma
        separated value.
        """
        header = Header("set-cookie", "foo1=bar1")
        header.append("foo2=bar2")

        self.assertEqual(
            header.toHeader(), "set-cookie: foo1=bar1\r\nset-cookie: foo2=bar2"
        )

    def test_append(self) -> None:
        """
        L{Header.append} adds a value.
        """
        header = Header("Accept", "text/html;q=1.0")
        header.append("*/*;q=0.1")

        self.assertEqual(header.data(), ["text/html;q=1.0", "*/*;q=0.1"])
        self.assertEqual(header.value(), "text/html;q=1.0, */*;q=0.1")
        self.assertEqual(header.plain(), "text/html;q=1.0, */*;q=0.1")

    def test_setItem(self) -> None:
        """
        Assigning to an index replaces a value; assigning to the index past
        the last value appends.
        """
        header = Header("Accept", "text/html")
        header[1] = "text/plain"
        header[0] = "application/json"

        self.assertEqual(header.data(), ["application/json", "text/plain"])
        self.assertEqual(len(header), 2)
        self.assertEqual(header[1], "text/plain")

    def test_setItemNotAnIndex(self) -> None:
        """
        Assigning to a non-integer key raises L{TypeError}.
        """
        header = Header("Accept", "text/html")

        self.assertRaises(TypeError, header.__setitem__, "q", "text/plain")

    def test_parse(self) -> None:
        """
        L{Header.parse} splits a line on its first colon.
        """
        header = Header.parse("Date: Thu, 25 Dec 2014 00:00:00 GMT")

        self.assertIsInstance(header, Header)
        assert header is not None
        self.assertEqual(header.name, "Date")
        self.assertEqual(header.value(), "Thu, 25 Dec 2014 00:00:00 GMT")

    def test_parseNoColon(self) -> None:
        """
        L{Header.parse} returns C{None} for a line without a colon.
        """
        self.assertIdentical(Header.parse("HTTP/1.1 200 OK"), None)

    def test_parseSubclass(self) -> None:
        """
        L{Header.parse} creates an instance of the class it is called on.
        """
        self.assertIsInstance(MIMEHeader.parse("Subject: hi"), MIMEHeader)

    @given(header_names(), header_values())
    def test_roundTrip(self, name: str, value: str) -> None:
        """
        Parsing a rendered header gives back the header.
        """
        header = Header.parse(Header(name, value).toHeader())

        assert header is not None
        self.assertEqual(header.name, name)
        self.assertEqual(header.value(), value)

    def test_httpPolicyDoesNotFold(self) -> None:
        """
        HTTP headers are not folded.
        """
        value = " ".join(["word"] * 100)

        self.assertEqual(
            Header("X-Long", value).toHeader(), f"X-Long: {value}"
        )

    def test_mimePolicyFolds(self) -> None:
        """
        With the MIME policy, long lines are folded at 76 columns onto
        continuation lines starting with a space.
        """
        value = " ".join(["word"] * 30)
        folded = Header("Subject", value).toHeader(MIME_POLICY)
        lines = folded.split("\r\n")

        self.assertTrue(len(lines) > 1)
        for line in lines:
            self.assertTrue(len(line) <= 76)
        for line in lines[1:]:
            self.assertTrue(line.startswith(" "))
        self.assertEqual(folded.replace("\r\n ", " "), f"Subject: {value}")

    def test_mimeHeaderFolds(self) -> None:
        """
        L{MIMEHeader} uses the MIME policy by default.
        """
        value = " ".join(["word"] * 30)

        self.assertEqual(
            MIMEHeader("Subject", value).toHeader(),
            Header("Subject", value).toHeader(MIME_POLICY),
        )

    def test_customPolicy(self) -> None:
        """
        A policy sets the line terminator of folded lines.
        """
        policy = WirePolicy(eol="\n", wrapWidth=20, maxLineLength=100)

        self.assertEqual(
            Header("X-Words", "one two three four five").toHeader(policy),
            "X-Words: one two\n three four five",
        )

    def test_tooLong(self) -> None:
        """
        A line longer than the policy's maximum line length raises
        L{HeaderTooLong}.
        """
        header = Header("X-Long", "a" * HTTP_POLICY.maxLineLength)

        self.assertRaises(HeaderTooLong, header.toHeader)

    def test_tooLongUnfoldable(self) -> None:
        """
        A word which can't be folded to fit the MIME maximum line length raises
        L{HeaderTooLong}.
        """
        header = MIMEHeader("X-Long", "a" * 1000)

        self.assertRaises(HeaderTooLong, header.toHeader)

    def test_copy(self) -> None:
        """
        A copied header is independent from the original.
        """
        header = Header("Accept", "text/html")
        clone = copy(header)
        clone.append("text/plain")
        clone.name = "ACCEPT"

        self.assertEqual(header.data(), ["text/html"])
        self.assertEqual(header.name, "Accept")
        self.assertEqual(clone.data(), ["text/html", "text/plain"])
        self.assertIsInstance(header.copy(), Header)
