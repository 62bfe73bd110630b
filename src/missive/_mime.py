# -*- test-case-name: missive.test.test_mime -*-
# Copyright (c) 2011-2021. See LICENSE for details.

"""
MIME content transfer encodings.
"""

from base64 import b64decode, b64encode
from binascii import a2b_qp, b2a_qp
from re import compile as compileRegex
from typing import Union

from ._imime import UnsupportedEncoding


__all__ = ()


Body = Union[bytes, str]

BODY_ENCODING = "utf-8"

ENCODINGS = ("7bit", "8bit", "binary", "quoted-printable", "base64")

_nonASCII = compileRegex(rb"[^\x00-\x7f]")
_controlOrHighBit = compileRegex(rb"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\xff]")


def bodyAsBytes(body: Body) -> bytes:
    """
    Convert a body to bytes if necessary.
    """
    if isinstance(body, bytes):
        return body
    return body.encode(BODY_ENCODING)


def isASCII(body: Body) -> bool:
    return _nonASCII.search(bodyAsBytes(body)) is None


def optimalEncoding(body: Body) -> str:
    """
    Pick the transfer encoding which best suits some content.

    Pure ASCII content needs no encoding.
    Content where more than a third of the bytes are control or high-bit
    characters is smaller as base64; anything else is smaller as
    quoted-printable.

    @param body: The content; text is encoded as UTF-8.

    @return: C{"7bit"}, C{"quoted-printable"} or C{"base64"}.
    """
    data = bodyAsBytes(body)
    if _nonASCII.search(data) is None:
        return "7bit"
    if len(_controlOrHighBit.findall(data)) > len(data) / 3:
        return "base64"
    return "quoted-printable"


def optimalCharset(body: Body) -> str:
    """
    Pick the charset which describes some content.

    @return: C{"US-ASCII"} or C{"UTF-8"}.
    """
    return "US-ASCII" if isASCII(body) else "UTF-8"


def _splitEvery(data: bytes, width: int, eol: bytes) -> bytes:
    return eol.join(data[i : i + width] for i in range(0, len(data), width))


def encode(
    body: Body, encoding: str, wrapWidth: int = 76, eol: str = "\r\n"
) -> bytes:
    """
    Apply a content transfer encoding.

    @param body: The content; text is encoded as UTF-8.
    @param encoding: The name of the transfer encoding.
    @param wrapWidth: The length of base64 lines, C{0} for a single line.
        Quoted-printable lines are always at most 76 characters long.
    @param eol: The line terminator for encoded lines.

    @raise UnsupportedEncoding: If the encoding is unknown, or if it is
        C{"7bit"} and the content is not ASCII.
    """
    data = bodyAsBytes(body)
    encoding = encoding.lower()
    lineEnd = eol.encode("ascii")

    if encoding == "quoted-printable":
        return lineEnd.join(b2a_qp(data).splitlines())
    if encoding == "base64":
        encoded = b64encode(data)
        if wrapWidth:
            return _splitEvery(encoded, wrapWidth, lineEnd)
        return encoded
    if encoding == "7bit":
        if not isASCII(data):
            raise UnsupportedEncoding(
                "7bit encoding cannot represent non-ASCII content."
            )
        return data
    if encoding in ("8bit", "binary"):
        return data

    raise UnsupportedEncoding(f"Unknown transfer encoding: {encoding!r}")


def decode(body: Body, encoding: str) -> bytes:
    """
    Undo a content transfer encoding.

    @raise UnsupportedEncoding: If the encoding is unknown.
    """
    data = bodyAsBytes(body)
    encoding = encoding.lower()

    if encoding == "quoted-printable":
        return a2b_qp(data)
    if encoding == "base64":
        return b64decode(b"".join(data.split()))
    if encoding in ("7bit", "8bit", "binary"):
        return data

    raise UnsupportedEncoding(f"Unknown transfer encoding: {encoding!r}")
