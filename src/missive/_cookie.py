# -*- test-case-name: missive.test.test_cookie -*-
# Copyright (c) 2011-2021. See LICENSE for details.

"""
Request and response cookies.
"""

from datetime import datetime, timezone
from ipaddress import ip_address
from re import compile as compileRegex
from time import time
from typing import Any, Dict, List, Mapping, Optional, Union
from urllib.parse import quote_plus, unquote_plus

from attrs import Attribute, define, evolve, field
from dateutil.parser import parse as parseDate
from hyperlink import URL, DecodedURL
from werkzeug.http import http_date
from zope.interface import implementer

from ._header import isScalar, scalarAsText
from ._icookie import (
    ICookie,
    ISetCookie,
    InvalidCookieName,
    InvalidCookieValue,
    InvalidDomain,
    InvalidExpires,
    InvalidPath,
)


__all__ = ()


AnyURL = Union[str, URL, DecodedURL]
Expires = Union[None, int, float, str, datetime]


_forbiddenNameCharacters = compileRegex(r"[=,; \t\r\n\x0b\x0c]")


def isValidName(name: object) -> bool:
    """
    Whether a string may be used as a cookie name.
    """
    return (
        isinstance(name, str)
        and bool(name)
        and _forbiddenNameCharacters.search(name) is None
    )


def checkName(name: object) -> str:
    """
    Return a cookie name if it is valid.

    @raise InvalidCookieName: If it isn't.
    """
    if not isValidName(name):
        raise InvalidCookieName(f"Invalid cookie name: {name!r}")
    return name  # type: ignore[return-value]


def isIPAddress(host: str) -> bool:
    try:
        ip_address(host.strip("[]"))
    except ValueError:
        return False
    return True


def cookieValue(value: Any) -> str:
    """
    Convert a cookie value to text.

    @raise InvalidCookieValue: If the value is empty.
    """
    if not isScalar(value):
        raise InvalidCookieValue(f"Cookie values must be scalars: {value!r}")
    text = scalarAsText(value)
    if not text:
        raise InvalidCookieValue("Cookie values must not be empty.")
    return text


def setCookieValue(value: Any) -> str:
    """
    Convert the value of a response cookie to text.

    Unlike the values of request cookies, it may be empty.

    @raise InvalidCookieValue: If the value is not a scalar.
    """
    if not isScalar(value):
        raise InvalidCookieValue(f"Cookie values must be scalars: {value!r}")
    return scalarAsText(value)


def cookieValues(value: Any) -> List[str]:
    """
    Convert a scalar or a sequence of scalars to a list of cookie values.

    @raise InvalidCookieValue: If there are no values or a value is empty.
    """
    if value is None:
        raise InvalidCookieValue("A cookie needs at least one value.")
    if isScalar(value):
        return [cookieValue(value)]
    values = [cookieValue(each) for each in value]
    if not values:
        raise InvalidCookieValue("A cookie needs at least one value.")
    return values


def urlFromText(url: AnyURL) -> URL:
    if isinstance(url, DecodedURL):
        return url.encoded_url
    if isinstance(url, URL):
        return url
    return URL.from_text(url)


def urlPath(url: URL) -> str:
    return "/" + "/".join(url.path)


@implementer(ICookie)
@define
class Cookie:
    """
    A cookie sent by a client.

    A client may send several cookies with the same name; their values are
    kept in order and the first one is the cookie's L{value}.
    """

    values: List[str] = field(converter=cookieValues)
    name: Optional[str] = None

    @property
    def value(self) -> str:
        return self.values[0]

    @value.setter
    def value(self, value: Any) -> None:
        self.values = value

    def append(self, value: Any) -> None:
        self.values.append(cookieValue(value))

    def data(self) -> Dict[str, Any]:
        return {"name": self.name, "value": list(self.values)}

    def __copy__(self) -> "Cookie":
        return evolve(self, values=list(self.values))

    copy = __copy__


def expiresAsTimestamp(value: Expires) -> Optional[int]:
    """
    Convert an expiry date to a UNIX timestamp.

    @param value: A timestamp, a L{datetime} or a date string.
        Dates without a time zone are taken to be in UTC.

    @raise InvalidExpires: If the value can't be understood as a date.
    """
    if value is None:
        return None

    if isinstance(value, bool):
        raise InvalidExpires(f"Invalid expiry date: {value!r}")

    if isinstance(value, (int, float)):
        timestamp = int(value)
        if timestamp != value or not -(2 ** 63) <= timestamp < 2 ** 63:
            raise InvalidExpires(f"Invalid expiry timestamp: {value!r}")
        return timestamp

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.lstrip("-").isdigit():
            return expiresAsTimestamp(int(text))
        try:
            value = parseDate(text)
        except (ValueError, OverflowError) as e:
            raise InvalidExpires(f"Invalid expiry date: {text!r}") from e

    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp())

    raise InvalidExpires(f"Invalid expiry date: {value!r}")


def pathOrRoot(value: Optional[str]) -> str:
    return "/" if value is None else value


def validatePath(instance: object, attribute: Attribute, value: str) -> None:
    if not isinstance(value, str) or not value.startswith("/"):
        raise InvalidPath(f"Cookie paths must start with '/': {value!r}")


def validateDomain(
    instance: object, attribute: Attribute, value: Optional[str]
) -> None:
    if value is None:
        return
    if not isinstance(value, str):
        raise InvalidDomain(f"Invalid cookie domain: {value!r}")
    if isIPAddress(value):
        return
    if value.count(".") < 2:
        raise InvalidDomain(
            f"Cookie domains must contain at least two dots: {value!r}"
        )


def optionalInt(value: Any) -> Optional[int]:
    return None if value is None else int(value)


@implementer(ISetCookie)
@define
class SetCookie:
    """
    A cookie set by a server, with the attributes which scope it.

    @ivar expires: Expiry date as a UNIX timestamp.
        C{None} or C{0} for a session cookie.
        Dates and date strings are converted on assignment.
    """

    value: str = field(converter=setCookieValue)
    expires: Optional[int] = field(
        default=None, converter=expiresAsTimestamp
    )
    path: str = field(
        default="/", converter=pathOrRoot, validator=validatePath
    )
    domain: Optional[str] = field(default=None, validator=validateDomain)
    maxAge: Optional[int] = field(default=None, converter=optionalInt)
    secure: bool = field(default=False, converter=bool)
    httpOnly: bool = field(default=False, converter=bool)
    name: Optional[str] = None

    def expired(self, onSessionExpiry: bool = False) -> bool:
        if not self.expires:
            return onSessionExpiry
        return self.expires < time()

    def match(self, url: AnyURL) -> bool:
        url = urlFromText(url)

        if url.scheme.lower() != ("https" if self.secure else "http"):
            return False

        if not self.domain:
            return False
        host = url.host.lower()
        domain = self.domain.lower()
        if domain.startswith("."):
            domain = domain[1:]
        if host != domain:
            if isIPAddress(host) or isIPAddress(domain):
                return False
            if not host.endswith("." + domain):
                return False

        return self.matchPath(urlPath(url))

    def matchPath(self, path: str) -> bool:
        """
        Whether a request path is within this cookie's path.

        The cookie path must be the request path, or a prefix of it which ends
        on a segment boundary.
        """
        if path == self.path:
            return True
        if not path.startswith(self.path):
            return False
        return self.path.endswith("/") or path[len(self.path)] == "/"

    def data(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "value": self.value,
            "expires": self.expires,
            "max-age": self.maxAge,
            "path": self.path,
            "domain": self.domain,
            "secure": self.secure,
            "httponly": self.httpOnly,
        }

    def toString(self, name: Optional[str] = None) -> str:
        """
        Render this cookie as a C{Set-Cookie} header value.

        @param name: The cookie name.
            C{None} uses the name this cookie was stored under.

        @raise InvalidCookieName: If the name is invalid.
        """
        if name is None:
            name = self.name
        parts = [f"{checkName(name)}={quote_plus(self.value)}"]
        if self.maxAge is not None:
            parts.append(f"Max-Age={self.maxAge}")
        elif self.expires:
            parts.append(f"Expires={http_date(self.expires)}")
        parts.append(f"Path={self.path}")
        if self.domain:
            parts.append(f"Domain={self.domain}")
        if self.secure:
            parts.append("Secure")
        if self.httpOnly:
            parts.append("HttpOnly")
        return "; ".join(parts)

    @classmethod
    def fromAttributes(
        cls, attributes: Mapping[str, Any], name: Optional[str] = None
    ) -> "SetCookie":
        """
        Create a cookie from a mapping of attribute names to values.

        Attribute names are case-insensitive; C{"max-age"} and C{"httponly"}
        may also be spelled C{"maxAge"} and C{"httpOnly"}.
        Unknown attributes are ignored.
        """
        values = {key.lower(): value for key, value in attributes.items()}
        if name is None:
            name = values.get("name")
        return cls(
            value=values.get("value"),
            expires=values.get("expires"),
            path=values.get("path"),
            domain=values.get("domain"),
            maxAge=values.get("max-age", values.get("maxage")),
            secure=values.get("secure", False),
            httpOnly=values.get("httponly", False),
            name=name,
        )

    @classmethod
    def fromString(
        cls, value: str, url: Optional[AnyURL] = None
    ) -> "SetCookie":
        """
        Parse a C{Set-Cookie} header value.

        @param url: The URL of the response which set the cookie, if known.
        """
        return cls.fromAttributes(parseSetCookie(value, url))

    def __copy__(self) -> "SetCookie":
        return evolve(self)

    copy = __copy__


def parseSetCookie(
    value: str, url: Optional[AnyURL] = None
) -> Dict[str, Any]:
    """
    Parse a C{Set-Cookie} header value into a mapping of attributes.

    Parsing is lenient: unknown attributes and malformed C{Max-Age} values
    are ignored, and nothing is validated.

    @param value: The header value, C{"name=value; Attribute=value; Flag"}.
    @param url: The URL of the response which set the cookie.
        If given, it supplies the default C{secure} flag, C{domain} and
        C{path}.

    @return: A mapping with C{name}, C{value}, C{expires}, C{max-age},
        C{path}, C{domain}, C{secure} and C{httponly} keys.
    """
    pairs = [part.strip() for part in value.split(";")]
    name, _, cookieText = pairs[0].partition("=")

    attributes: Dict[str, Any] = {
        "name": name.strip(),
        "value": unquote_plus(cookieText.strip()),
        "expires": None,
        "max-age": None,
        "path": "/",
        "domain": None,
        "secure": False,
        "httponly": False,
    }

    if url is not None:
        parsed = urlFromText(url)
        path = urlPath(parsed)
        attributes["secure"] = parsed.scheme.lower() == "https"
        attributes["domain"] = parsed.host or None
        attributes["path"] = path[: path.rindex("/") + 1] or "/"

    for pair in pairs[1:]:
        key, _, attribute = pair.partition("=")
        key = key.strip().lower()
        attribute = attribute.strip()
        if key == "expires":
            attributes["expires"] = attribute
        elif key == "max-age":
            if attribute.lstrip("-").isdigit():
                attributes["max-age"] = int(attribute)
        elif key == "path":
            attributes["path"] = attribute
        elif key == "domain":
            if not attribute.startswith(".") and not isIPAddress(attribute):
                attribute = "." + attribute
            attributes["domain"] = attribute
        elif key == "secure":
            attributes["secure"] = True
        elif key == "httponly":
            attributes["httponly"] = True

    return attributes
