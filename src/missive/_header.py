# -*- test-case-name: missive.test.test_header -*-
# Copyright (c) 2011-2021. See LICENSE for details.

"""
A single header field.
"""

from html import unescape
from re import compile as compileRegex
from typing import ClassVar, Iterable, Iterator, List, Optional, Union

from attrs import frozen
from zope.interface import implementer

from ._imessage import HeaderTooLong, IHeader, Scalar, String


__all__ = ()


HeaderValue = Union[Scalar, Iterable[Scalar]]


# Encoding/decoding header data

HEADER_NAME_ENCODING = "iso-8859-1"
HEADER_VALUE_ENCODING = "iso-8859-1"


def headerNameAsText(name: String) -> str:
    """
    Convert a header name to str if necessary.
    """
    if isinstance(name, str):
        return name
    else:
        return name.decode(HEADER_NAME_ENCODING)


def headerValueAsBytes(value: String) -> bytes:
    """
    Convert a header value to bytes if necessary.
    """
    if isinstance(value, bytes):
        return value
    else:
        return value.encode(HEADER_VALUE_ENCODING)


def headerValueAsText(value: String) -> str:
    """
    Convert a header value to str if necessary.
    """
    if isinstance(value, str):
        return value
    else:
        return value.decode(HEADER_VALUE_ENCODING)


def isScalar(value: object) -> bool:
    """
    Whether a value can be stored as a single header value.
    """
    return isinstance(value, (bytes, str, int, float))


def scalarAsText(value: Scalar) -> str:
    """
    Convert a scalar header value to str.
    """
    if isinstance(value, (bytes, str)):
        return headerValueAsText(value)
    return str(value)


_lineBreaks = compileRegex(r"[\r\n\x00]")


def sanitizeValue(value: str) -> str:
    """
    Remove line breaks from a header value, including line breaks smuggled in
    as HTML character references.
    """
    value = _lineBreaks.sub("", value)
    return _lineBreaks.sub("", unescape(value)).strip()


_foldingPoints = compileRegex(r"(?<=\S) (?=\S)")


def fold(prefix: str, value: str, width: int) -> List[str]:
    """
    Fold a header line into lines of at most C{width} characters where
    possible.

    Lines are only broken at single spaces between words, and each
    continuation line starts with the space it was broken at, so unfolding
    the lines gives back C{prefix + value} unchanged.
    A word too long to fit is left on a line of its own.
    """
    words = _foldingPoints.split(value)
    lines = []
    line = prefix + words[0]
    for word in words[1:]:
        if len(line) + 1 + len(word) > width:
            lines.append(line)
            line = ""
        line = f"{line} {word}"
    lines.append(line)
    return lines


@frozen
class WirePolicy:
    """
    Layout rules for header lines.

    @ivar eol: The line terminator.
    @ivar wrapWidth: The column to fold long lines at, or C{0} to never fold.
    @ivar maxLineLength: The longest physical line allowed.
    """

    eol: str = "\r\n"
    wrapWidth: int = 0
    maxLineLength: int = 8000


HTTP_POLICY = WirePolicy()
MIME_POLICY = WirePolicy(wrapWidth=76, maxLineLength=998)


@implementer(IHeader)
class Header:
    """
    One header field.

    A value given as a sequence is joined with commas, then, as with a scalar
    value, split back on commas into the header's values.
    C{Set-Cookie} headers are the exception: each value is kept whole.
    """

    policy: ClassVar[WirePolicy] = HTTP_POLICY

    def __init__(self, name: String, value: HeaderValue = "") -> None:
        self.name = headerNameAsText(name)
        self._data: List[str] = []
        self._plain = ""
        self.setValue(value)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name!r}: {self._data!r}>"

    def isSetCookie(self) -> bool:
        return self.name.lower() == "set-cookie"

    def setValue(self, value: HeaderValue) -> None:
        """
        Replace the values of this header.

        @param value: A scalar or a sequence of scalars.
        """
        if isScalar(value):
            values = [value]
        else:
            values = list(value)  # type: ignore[arg-type]
        texts = [sanitizeValue(scalarAsText(each)) for each in values]

        if self.isSetCookie():
            self._data = [text for text in texts if text]
            self._plain = ", ".join(self._data)
        else:
            self._plain = ", ".join(texts)
            if self._plain:
                self._data = [part.strip() for part in self._plain.split(",")]
            else:
                self._data = []

    def append(self, value: Scalar) -> None:
        text = sanitizeValue(scalarAsText(value))
        self._data.append(text)
        self._plain = f"{self._plain}, {text}" if self._plain else text

    def __getitem__(self, index: int) -> str:
        return self._data[index]

    def __setitem__(self, index: int, value: Scalar) -> None:
        if not isinstance(index, int) or isinstance(index, bool):
            raise TypeError(f"Header value index must be an int: {index!r}")
        if index == len(self._data):
            self.append(value)
            return
        self._data[index] = sanitizeValue(scalarAsText(value))
        self._plain = ", ".join(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def value(self) -> str:
        values = [value for value in self._data if value]
        if self.isSetCookie():
            return f"{self.policy.eol}{self.name}: ".join(values)
        return ", ".join(values)

    def data(self) -> List[str]:
        return list(self._data)

    def plain(self) -> str:
        return self._plain

    def toHeader(self, policy: Optional[WirePolicy] = None) -> str:
        if policy is None:
            policy = self.policy

        lines = []
        for value in self.data() if self.isSetCookie() else [self.value()]:
            if not value and self.isSetCookie():
                continue
            line = f"{self.name}: {value}"
            if policy.wrapWidth and len(line) > policy.wrapWidth:
                lines.extend(fold(f"{self.name}: ", value, policy.wrapWidth))
            else:
                lines.append(line)

        if not lines:
            lines = [f"{self.name}: "]

        for line in lines:
            if len(line) > policy.maxLineLength:
                raise HeaderTooLong(
                    f"Header {self.name!r} has a line of {len(line)} "
                    f"characters, the maximum is {policy.maxLineLength}."
                )

        return policy.eol.join(lines)

    @classmethod
    def parse(cls, line: String) -> Optional["Header"]:
        """
        Parse a header line.

        @param line: A header line, without its line terminator.

        @return: The parsed header, or C{None} if the line has no colon.
        """
        name, colon, value = headerValueAsText(line).partition(":")
        if not colon:
            return None
        return cls(name.strip(), value.strip())

    def __copy__(self) -> "Header":
        clone = self.__class__(self.name)
        clone._data = list(self._data)
        clone._plain = self._plain
        return clone

    copy = __copy__


class MIMEHeader(Header):
    """
    A header field of a MIME entity, folded at 76 columns.
    """

    policy = MIME_POLICY
