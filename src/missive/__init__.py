# Copyright (c) 2011-2021. See LICENSE for details.

"""
HTTP and MIME messages: headers, cookies, cookie jars and multipart bodies.
"""

from ._cookie import Cookie, SetCookie, isValidName
from ._cookies import Cookies, SetCookies
from ._header import HTTP_POLICY, MIME_POLICY, Header, MIMEHeader, WirePolicy
from ._headers import HTTPHeaders, Headers, MIMEHeaders, ResponseHeaders
from ._jar import parseJar, readJar, toJar
from ._mixedpart import MixedPart
from ._part import Part, PartOptions
from ._version import __version__ as _incremental_version


__all__ = (
    "Cookie",
    "Cookies",
    "HTTPHeaders",
    "HTTP_POLICY",
    "Header",
    "Headers",
    "MIMEHeader",
    "MIMEHeaders",
    "MIME_POLICY",
    "MixedPart",
    "Part",
    "PartOptions",
    "ResponseHeaders",
    "SetCookie",
    "SetCookies",
    "WirePolicy",
    "__author__",
    "__copyright__",
    "__license__",
    "__version__",
    "isValidName",
    "parseJar",
    "readJar",
    "toJar",
)


# Make it a str, for backwards compatibility
__version__ = _incremental_version.base()

__author__ = "The missive contributors (see AUTHORS)"
__license__ = "MIT"
__copyright__ = f"Copyright 2011-2021 {__author__}"
