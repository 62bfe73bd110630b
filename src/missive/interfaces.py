# Copyright (c) 2011-2021. See LICENSE for details.

"""
Interfaces and exceptions.
"""

from ._icookie import (
    CookieError,
    ICookie,
    ICookies,
    InvalidCookieName,
    InvalidCookieValue,
    InvalidDomain,
    InvalidExpires,
    InvalidJarFormat,
    InvalidPath,
    ISetCookie,
    UnknownCookie,
)
from ._imessage import (
    EmptyHeaderName,
    HeaderError,
    HeaderTooLong,
    IHeader,
    IHeaders,
    InvalidHeaderLine,
    InvalidHeaderName,
    InvalidHeaderValue,
    MessageError,
)
from ._imime import (
    IByteSource,
    IMultipart,
    IPart,
    MimeError,
    MissingName,
    UnsupportedEncoding,
)


__all__ = (
    "CookieError",
    "EmptyHeaderName",
    "HeaderError",
    "HeaderTooLong",
    "IByteSource",
    "ICookie",
    "ICookies",
    "IHeader",
    "IHeaders",
    "IMultipart",
    "IPart",
    "ISetCookie",
    "InvalidCookieName",
    "InvalidCookieValue",
    "InvalidDomain",
    "InvalidExpires",
    "InvalidHeaderLine",
    "InvalidHeaderName",
    "InvalidHeaderValue",
    "InvalidJarFormat",
    "InvalidPath",
    "MessageError",
    "MimeError",
    "MissingName",
    "UnknownCookie",
    "UnsupportedEncoding",
)
