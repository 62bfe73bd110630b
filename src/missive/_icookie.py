# Copyright (c) 2011-2021. See LICENSE for details.

"""
Interfaces related to cookies.

Do not import directly from here, except:
 - From interfaces.py.
 - From implementations of these interfaces.
"""

from typing import Any, Dict, List, Optional

from zope.interface import Attribute, Interface

from ._imessage import MessageError


__all__ = ()


class CookieError(MessageError):
    """
    A cookie could not be stored, parsed or rendered.
    """


class InvalidCookieValue(CookieError):
    """
    A cookie value is empty where a value is required, or is not a scalar.
    """


class InvalidCookieName(CookieError):
    """
    A cookie name is empty or contains a forbidden character.
    """


class InvalidDomain(CookieError):
    """
    A cookie domain is neither an IP address nor contains at least two dots.
    """


class InvalidPath(CookieError):
    """
    A cookie path does not start with C{"/"}.
    """


class InvalidExpires(CookieError):
    """
    A cookie expiry date could not be understood.
    """


class UnknownCookie(CookieError, KeyError):
    """
    No cookie was ever stored under the requested name.
    """


class InvalidJarFormat(CookieError):
    """
    A cookie jar line does not have exactly seven tab-separated fields.
    """


class ICookie(Interface):
    """
    A request cookie: the values sent by a client under one name.
    """

    name: Optional[str] = Attribute("The cookie name, if known.")
    values: List[str] = Attribute("The cookie values, in order.")
    value: str = Attribute("The first cookie value.")

    def append(value: object) -> None:
        """
        Add a value for this cookie.

        @raise InvalidCookieValue: If the value is empty.
        """


class ISetCookie(Interface):
    """
    A response cookie, with the attributes which scope it.
    """

    name: Optional[str] = Attribute("The cookie name, if known.")
    value: str = Attribute("The cookie value.")
    expires: Optional[int] = Attribute(
        "Expiry date as a UNIX timestamp, C{None} for a session cookie."
    )
    maxAge: Optional[int] = Attribute("Lifetime in seconds, if any.")
    path: str = Attribute("The path scope.")
    domain: Optional[str] = Attribute("The domain scope, if any.")
    secure: bool = Attribute("Whether the cookie is only sent over HTTPS.")
    httpOnly: bool = Attribute("Whether the cookie is hidden from scripts.")

    def expired(onSessionExpiry: bool = False) -> bool:
        """
        Whether this cookie has expired.

        @param onSessionExpiry: Whether session cookies count as expired.
        """

    def match(url: Any) -> bool:
        """
        Whether this cookie should be sent to the given URL.
        """

    def toString(name: Optional[str] = None) -> str:
        """
        Render this cookie as a C{Set-Cookie} header value.
        """

    def data() -> Dict[str, Any]:
        """
        The attributes of this cookie.
        """


class ICookies(Interface):
    """
    A collection of cookies, keyed by name and scoped by domain and path.

    The collection also supports the mapping protocol: item access returns
    every cookie stored under a name, across all scopes.
    """

    def keys() -> List[str]:
        """
        The distinct cookie names, in insertion order.
        """

    def items() -> List:
        """
        The C{(name, cookie)} pairs, one per stored cookie, in insertion order.
        """

    def flushExpired() -> None:
        """
        Remove every expired cookie.
        """

    def toHeader() -> str:
        """
        Render the collection as header lines.
        """

    def data() -> Dict[str, Any]:
        """
        Export the collection as plain data.
        """
