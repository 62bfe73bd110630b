# Copyright (c) 2011-2021. See LICENSE for details.

"""
Interfaces related to message headers.

Do not import directly from here, except:
 - From interfaces.py.
 - From implementations of these interfaces.
"""

from typing import Iterable, List, Optional, Union

from zope.interface import Attribute, Interface


__all__ = ()


String = Union[bytes, str]
Scalar = Union[bytes, str, int, float]


class MessageError(Exception):
    """
    Base class for errors raised while building or parsing a message.
    """


class HeaderError(MessageError):
    """
    A header could not be stored or rendered.
    """


class InvalidHeaderName(HeaderError):
    """
    A header name is not a valid token.
    """


class EmptyHeaderName(InvalidHeaderName):
    """
    A header was assigned under an empty name.
    """


class InvalidHeaderValue(HeaderError):
    """
    A header was assigned a value which is neither a scalar nor a header.
    """


class InvalidHeaderLine(HeaderError):
    """
    A header line has no colon and is not a status line.
    """


class HeaderTooLong(HeaderError):
    """
    A rendered header line exceeds the maximum line length.
    """


class IHeader(Interface):
    """
    One header field: a name and its ordered values.

    Values are stored split on commas, except for C{Set-Cookie}, whose values
    are never comma-joined since each one defines a distinct cookie.
    """

    name: str = Attribute("The header name, as last assigned.")

    def append(value: Scalar) -> None:
        """
        Add a value to the end of this header's values.

        @param value: The value to add.
        """

    def value() -> str:
        """
        The header value, as rendered after C{"Name: "} on the wire.
        """

    def data() -> List[str]:
        """
        The header values, in order.
        """

    def plain() -> str:
        """
        The sanitized header value, before splitting on commas.
        """

    def toHeader(policy: object = None) -> str:
        """
        Render this header as one (possibly folded) header line, without a
        trailing line terminator.

        @param policy: The L{WirePolicy} to render with.
            C{None} uses this header's default policy.

        @raise HeaderTooLong: If a physical line exceeds the policy's maximum
            line length.
        """


class IHeaders(Interface):
    """
    A case-insensitive, insertion-ordered collection of L{IHeader}s.

    The collection also supports the mapping protocol: item access, item
    assignment and deletion, C{in}, C{len} and iteration over header names,
    all with case-insensitive names.
    """

    status: Optional[str] = Attribute(
        "The status line, if one was added, else C{None}."
    )

    def get(name: String, default: object = None) -> object:
        """
        Get the header with the given name.

        @param name: The name of the header to look for.
        @param default: The value to return if there is no such header.
        """

    def add(lines: object) -> None:
        """
        Parse and add header lines.

        @param lines: A block of text, an iterable of lines, or a mapping of
            header names to values.
        """

    def prepend(name: String, value: object) -> None:
        """
        Add a header before all others.
        """

    def appendValue(name: String, value: Scalar) -> None:
        """
        Add a value to the header with the given name, creating the header if
        necessary.
        """

    def remove(name: String) -> None:
        """
        Remove the header with the given name, if present.
        """

    def data() -> List[str]:
        """
        One rendered line per header, in order.
        """

    def toHeader() -> str:
        """
        Render the header block.
        """

    def items() -> Iterable:
        """
        The C{(name, header)} pairs in this collection, in order.
        """
