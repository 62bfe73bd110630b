# Copyright (c) 2011-2021. See LICENSE for details.

"""
Interfaces related to MIME bodies.

Do not import directly from here, except:
 - From interfaces.py.
 - From implementations of these interfaces.
"""

from typing import Optional

from zope.interface import Attribute, Interface

from ._imessage import MessageError


__all__ = ()


class MimeError(MessageError):
    """
    A MIME body could not be composed or encoded.
    """


class MissingName(MimeError):
    """
    A body part was given a disposition but no name.
    """


class UnsupportedEncoding(MimeError):
    """
    A transfer encoding is unknown or cannot represent the content.
    """


class IByteSource(Interface):
    """
    A readable, possibly seekable, source of bytes.
    """

    def read(size: int = -1) -> bytes:
        """
        Read up to C{size} bytes, or everything left if C{size} is negative.
        """

    def eof() -> bool:
        """
        Whether everything has been read.
        """

    def rewind() -> None:
        """
        Move back to the start of the source.
        """

    def isSeekable() -> bool:
        """
        Whether the source can be rewound.
        """

    def length() -> Optional[int]:
        """
        The total length of the source in bytes, if known.
        """

    def close() -> None:
        """
        Release the underlying resource.
        """


class IPart(IByteSource):
    """
    A body part: a byte source with a media type and a transfer encoding.
    """

    mime: Optional[str] = Attribute("The declared media type, if any.")
    charset: Optional[str] = Attribute("The declared charset, if any.")
    encoding: Optional[str] = Attribute(
        "The declared transfer encoding, if any."
    )

    def flush() -> bytes:
        """
        Read everything left, transfer-encoded with C{encoding}.
        """

    def toBytes(encoding: Optional[str] = None) -> bytes:
        """
        The whole content from the start, transfer-encoded.
        """


class IMultipart(Interface):
    """
    A body which may be composed of several parts and knows how to render
    itself as a complete message, headers included.
    """

    headers = Attribute("The L{IHeaders} of the body.")

    def isMultipart() -> bool:
        """
        Whether the body is rendered as a multipart body.
        """

    def boundary() -> Optional[str]:
        """
        The multipart boundary, C{None} if the body is not multipart.
        """

    def flush() -> bytes:
        """
        Render the body.
        """

    def toMessage() -> bytes:
        """
        Render the headers and the body.
        """
