# -*- test-case-name: missive.test.test_headers -*-
# Copyright (c) 2011-2021. See LICENSE for details.

"""
Header collections.
"""

from re import compile as compileRegex
from typing import (
    Any,
    ClassVar,
    Dict,
    Iterator,
    List,
    Mapping,
    Optional,
    Tuple,
    Type,
    TypeVar,
    Union,
)

from zope.interface import implementer

from twisted.logger import Logger

from ._cookies import Cookies, SetCookies
from ._header import (
    Header,
    MIMEHeader,
    headerNameAsText,
    headerValueAsText,
    isScalar,
    scalarAsText,
)
from ._imessage import (
    EmptyHeaderName,
    IHeaders,
    InvalidHeaderLine,
    InvalidHeaderName,
    InvalidHeaderValue,
    MessageError,
    Scalar,
    String,
)


__all__ = ()


log = Logger()

# A stored entry is a header, or a line kept as given by a lenient collection.
Entry = Union[Header, str]

H = TypeVar("H", bound="Headers")

_token = compileRegex(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")
_statusLine = compileRegex(r"^HTTP/\d+(\.\d+)?\s+\d{3}(\s+.*)?$")
_folding = compileRegex(r"\r?\n[ \t]+")


def unfold(text: str) -> str:
    """
    Join folded continuation lines to the line they continue.
    """
    return _folding.sub(" ", text)


def isStatusLine(line: str) -> bool:
    return _statusLine.match(line) is not None


@implementer(IHeaders)
class Headers:
    """
    A case-insensitive, insertion-ordered collection of headers.

    Storing a header under the name of an existing one replaces it, keeping
    its position but taking the letter case of the new name.

    This collection is lenient: a line given to L{add} which is neither a
    header nor a status line is kept as given and rendered back verbatim.
    """

    headerType: ClassVar[Type[Header]] = Header

    # Reject lines which are neither headers nor status lines.
    strict: ClassVar[bool] = False

    # End the rendered block with an empty line.
    terminated: ClassVar[bool] = False

    def __init__(self, lines: Any = None) -> None:
        self.status: Optional[str] = None
        self._headers: Dict[str, Entry] = {}
        if lines is not None:
            self.add(lines)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.data()!r}>"

    def _header(self, name: Optional[String], value: Any) -> Header:
        if not name:
            raise EmptyHeaderName("Header names must not be empty.")
        text = headerNameAsText(name)
        if _token.match(text) is None:
            raise InvalidHeaderName(f"Invalid header name: {text!r}")
        if isinstance(value, Header):
            value.name = text
            return value
        if isScalar(value):
            return self.headerType(text, value)
        raise InvalidHeaderValue(
            f"Header values must be scalars or headers, not {value!r}"
        )

    def __setitem__(self, name: String, value: Any) -> None:
        header = self._header(name, value)
        self._headers[header.name.lower()] = header

    def __getitem__(self, name: String) -> Entry:
        return self._headers[headerNameAsText(name).lower()]

    def get(self, name: String, default: Any = None) -> Any:
        return self._headers.get(headerNameAsText(name).lower(), default)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, (bytes, str)):
            return False
        return headerNameAsText(name).lower() in self._headers

    def __delitem__(self, name: String) -> None:
        self._headers.pop(headerNameAsText(name).lower(), None)

    remove = __delitem__

    def __iter__(self) -> Iterator[str]:
        return iter([name for name, entry in self.items()])

    def __len__(self) -> int:
        return len(self._headers)

    def items(self) -> List[Tuple[str, Entry]]:
        return [
            (entry.name if isinstance(entry, Header) else entry, entry)
            for entry in self._headers.values()
        ]

    def clear(self) -> None:
        self.status = None
        self._headers.clear()

    def prepend(self, name: String, value: Any) -> None:
        header = self._header(name, value)
        key = header.name.lower()
        headers = {key: header}
        headers.update(
            (other, entry)
            for other, entry in self._headers.items()
            if other != key
        )
        self._headers = headers

    def appendValue(self, name: String, value: Scalar) -> None:
        entry = self.get(name)
        if isinstance(entry, Header):
            entry.append(value)
        else:
            self[name] = value

    def add(self, lines: Any) -> None:
        """
        Add header lines.

        @param lines: A block of text, split on newlines after joining folded
            lines; an iterable of lines; or a mapping of header names to
            values, where a sequence of values is joined with commas.

        @raise InvalidHeaderLine: If this collection is strict and a line is
            neither a header nor a status line.
        """
        if isinstance(lines, (bytes, str)):
            lines = unfold(headerValueAsText(lines)).split("\n")
        elif isinstance(lines, Mapping):
            for name, value in lines.items():
                if not (isScalar(value) or isinstance(value, Header)):
                    value = ", ".join(scalarAsText(each) for each in value)
                self[name] = value
            return

        for line in lines:
            self.addLine(line)

    def addLine(self, line: String) -> None:
        line = headerValueAsText(line).strip()
        if not line:
            return

        if isStatusLine(line):
            self.status = line
            return

        header = self.headerType.parse(line)
        if header is not None:
            self.store(header)
        elif self.strict:
            raise InvalidHeaderLine(f"Invalid header line: {line!r}")
        else:
            self._headers[line.lower()] = line

    def store(self, header: Header) -> None:
        """
        Store a header parsed by L{add}.
        """
        self[header.name] = header

    def data(self) -> List[str]:
        return [
            entry.toHeader() if isinstance(entry, Header) else entry
            for entry in self._headers.values()
        ]

    def toHeader(self) -> str:
        eol = self.headerType.policy.eol
        lines = self.data()
        if self.status is not None:
            lines.insert(0, self.status)
        if not lines:
            return ""
        block = "".join(line + eol for line in lines)
        if self.terminated:
            block += eol
        return block

    def __str__(self) -> str:
        return self.toHeader()

    @classmethod
    def parse(cls: Type[H], text: String) -> H:
        """
        Parse a block of header lines, skipping lines which can't be added.
        """
        headers = cls()
        for line in unfold(headerValueAsText(text)).split("\n"):
            line = line.rstrip("\r")
            try:
                headers.addLine(line)
            except MessageError as e:
                log.warn(
                    "Skipping header line {line!r}: {error}",
                    line=line,
                    error=e,
                )
        return headers

    def __copy__(self: H) -> H:
        clone = self.__class__.__new__(self.__class__)
        clone.__dict__.update(self.__dict__)
        clone._headers = {
            key: entry.copy() if isinstance(entry, Header) else entry
            for key, entry in self._headers.items()
        }
        return clone

    copy = __copy__


class HTTPHeaders(Headers):
    """
    The headers of an HTTP message.

    C{Cookie} and C{Set-Cookie} lines given to L{add} are stored in the
    L{cookies} and L{setCookies} collections instead of as plain headers, and
    rendered after the plain headers.

    @ivar cookies: The request cookies.
    @ivar setCookies: The response cookies.
    """

    strict = True

    def __init__(self, lines: Any = None) -> None:
        self.cookies = Cookies()
        self.setCookies = SetCookies()
        super().__init__(lines)

    def store(self, header: Header) -> None:
        name = header.name.lower()
        if name == "cookie":
            self.cookies.update(header.plain())
        elif name == "set-cookie":
            self.setCookies.update(header.plain())
        else:
            super().store(header)

    def clear(self) -> None:
        super().clear()
        self.cookies.clear()
        self.setCookies.clear()

    def data(self) -> List[str]:
        lines = super().data()
        cookies = self.cookies.toHeader()
        if cookies:
            lines.append(cookies)
        setCookies = self.setCookies.toHeader()
        if setCookies:
            lines.extend(setCookies.split("\r\n"))
        return lines

    def __copy__(self) -> "HTTPHeaders":
        clone = super().__copy__()
        clone.cookies = self.cookies.copy()
        clone.setCookies = self.setCookies.copy()
        return clone

    copy = __copy__


class ResponseHeaders(HTTPHeaders):
    """
    The headers of an HTTP response, rendered with a closing empty line.
    """

    terminated = True


class MIMEHeaders(Headers):
    """
    The headers of a MIME entity, folded at 76 columns.
    """

    headerType = MIMEHeader
