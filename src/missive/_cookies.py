# -*- test-case-name: missive.test.test_cookies -*-
# Copyright (c) 2011-2021. See LICENSE for details.

"""
Collections of request and response cookies.
"""

from typing import (
    Any,
    Dict,
    Iterator,
    List,
    Mapping,
    Optional,
    Tuple,
    TypeVar,
)

from zope.interface import implementer

from twisted.logger import Logger

from ._cookie import (
    AnyURL,
    Cookie,
    SetCookie,
    checkName,
    parseSetCookie,
)
from ._header import isScalar
from ._icookie import ICookies, UnknownCookie


__all__ = ()


log = Logger()

# A cookie is identified by its name and its scope.
CookieKey = Tuple[str, Optional[str], Optional[str]]

Collection = TypeVar("Collection", bound="CookieCollection")


class CookieCollection:
    """
    Cookies stored by name and scope.

    Cookies with the same name but a different domain or path are kept side
    by side; storing a cookie with the name and scope of an existing one
    replaces it.
    """

    def __init__(self) -> None:
        self._data: Dict[CookieKey, Any] = {}
        self._hashes: Dict[str, List[CookieKey]] = {}
        self._names: Dict[CookieKey, str] = {}

    def box(self, value: Any) -> Any:
        """
        Convert a value to the type of cookie stored in this collection.
        """
        raise NotImplementedError()

    def key(self, name: str, cookie: Any) -> CookieKey:
        return (name, None, None)

    def isExpired(self, cookie: Any) -> bool:
        return False

    def __setitem__(self, name: str, value: Any) -> None:
        checkName(name)
        cookie = self.box(value)
        cookie.name = name
        key = self.key(name, cookie)
        if key not in self._data:
            self._hashes.setdefault(name, []).append(key)
            self._names[key] = name
        self._data[key] = cookie

    def __getitem__(self, name: str) -> List[Any]:
        if name not in self._hashes:
            raise UnknownCookie(name)
        return [self._data[key] for key in self._hashes[name]]

    def get(self, name: str, default: Any = None) -> Any:
        if name not in self._hashes:
            return default
        return self[name]

    def __contains__(self, name: object) -> bool:
        return name in self._hashes

    def __delitem__(self, name: str) -> None:
        for key in self._hashes.pop(name, []):
            del self._data[key]
            del self._names[key]

    remove = __delitem__

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._hashes))

    def __len__(self) -> int:
        """
        The number of cookies stored, counting each scope of a name.
        """
        return len(self._data)

    def keys(self) -> List[str]:
        return list(self._hashes)

    def items(self) -> List[Tuple[str, Any]]:
        return [
            (self._names[key], cookie) for key, cookie in self._data.items()
        ]

    def clear(self) -> None:
        self._data.clear()
        self._hashes.clear()
        self._names.clear()

    def flushExpired(self) -> None:
        expired = [
            key for key, cookie in self._data.items() if self.isExpired(cookie)
        ]
        for key in expired:
            name = self._names.pop(key)
            del self._data[key]
            self._hashes[name].remove(key)
            if not self._hashes[name]:
                del self._hashes[name]
        if expired:
            log.debug("Flushed {count} expired cookies.", count=len(expired))

    def __copy__(self: Collection) -> Collection:
        clone = self.__class__.__new__(self.__class__)
        clone.__dict__.update(self.__dict__)
        clone._data = {
            key: cookie.copy() for key, cookie in self._data.items()
        }
        clone._hashes = {
            name: list(keys) for name, keys in self._hashes.items()
        }
        clone._names = dict(self._names)
        return clone

    copy = __copy__

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.items()!r}>"


@implementer(ICookies)
class Cookies(CookieCollection):
    """
    The cookies of a request, as sent in a C{Cookie} header.
    """

    def box(self, value: Any) -> Cookie:
        if isinstance(value, Cookie):
            return value
        if isinstance(value, Mapping):
            return Cookie(value.get("value"))
        if isScalar(value) or isinstance(value, (list, tuple)):
            return Cookie(value)
        raise TypeError(f"Not a request cookie: {value!r}")

    def appendValue(self, name: str, value: Any) -> None:
        """
        Add a value to the cookie with the given name, creating the cookie if
        necessary.
        """
        if name in self:
            self[name][0].append(value)
        else:
            self[name] = value

    def toHeader(self) -> str:
        """
        Render the collection as a C{Cookie} header line, or an empty string
        if there are no cookies.

        Values are rendered as given; they are not URL-encoded.
        """
        pairs = [
            f"{name}={value}"
            for name, cookie in self.items()
            for value in cookie.values
        ]
        if not pairs:
            return ""
        return "Cookie: " + "; ".join(pairs)

    def data(self) -> Dict[str, Any]:
        """
        A mapping of cookie names to their first values.
        """
        return {name: cookie.value for name, cookie in self.items()}

    def update(self, header: str) -> None:
        """
        Add the cookies in a C{Cookie} header value.
        """
        for cookie in self.parse(header):
            for value in cookie["value"]:
                self.appendValue(cookie["name"], value)

    @staticmethod
    def parse(value: str) -> List[Dict[str, Any]]:
        """
        Parse a C{Cookie} header value.

        @return: One mapping per distinct cookie name, with a C{name} and a
            list of C{value}s, in the order the names first appear.
        """
        cookies: Dict[str, Dict[str, Any]] = {}
        for pair in value.split(";"):
            pair = pair.strip()
            if not pair:
                continue
            name, _, text = pair.partition("=")
            name = name.strip()
            cookie = cookies.setdefault(name, {"name": name, "value": []})
            cookie["value"].append(text.strip())
        return list(cookies.values())


@implementer(ICookies)
class SetCookies(CookieCollection):
    """
    The cookies of a response, as sent in C{Set-Cookie} headers.

    @ivar scope: Default attributes for cookies created from scalars or
        mappings.
    """

    def __init__(self, scope: Optional[Mapping[str, Any]] = None) -> None:
        super().__init__()
        self.scope: Dict[str, Any] = {
            "secure": False,
            "domain": None,
            "path": "/",
        }
        if scope is not None:
            self.scope.update(scope)

    def box(self, value: Any) -> SetCookie:
        if isinstance(value, SetCookie):
            return value
        if isinstance(value, Mapping):
            return SetCookie.fromAttributes({**self.scope, **value})
        if isScalar(value):
            return SetCookie.fromAttributes({**self.scope, "value": value})
        raise TypeError(f"Not a response cookie: {value!r}")

    def key(self, name: str, cookie: SetCookie) -> CookieKey:
        return (name, cookie.domain, cookie.path)

    def isExpired(self, cookie: SetCookie) -> bool:
        return cookie.expired()

    def toHeader(self) -> str:
        """
        Render every cookie which has not expired as a C{Set-Cookie} header
        line.

        @raise InvalidCookieName: If a cookie has an invalid name.
        """
        return "\r\n".join(
            f"Set-Cookie: {cookie.toString(name)}"
            for name, cookie in self.items()
            if not cookie.expired()
        )

    toSetCookie = toHeader

    def data(self) -> Dict[str, List[Dict[str, Any]]]:
        """
        A mapping of cookie names to the attributes of each of their scopes.
        """
        result: Dict[str, List[Dict[str, Any]]] = {}
        for name, cookie in self.items():
            result.setdefault(name, []).append(cookie.data())
        return result

    def update(self, header: str, url: Optional[AnyURL] = None) -> None:
        """
        Add the cookie in a C{Set-Cookie} header value.
        """
        cookie = SetCookie.fromString(header, url)
        self[cookie.name] = cookie  # type: ignore[index]

    def forURL(self, url: AnyURL) -> Cookies:
        """
        The request cookies a client should send to the given URL.
        """
        cookies = Cookies()
        for name, cookie in self.items():
            if not cookie.expired() and cookie.match(url):
                cookies.appendValue(name, cookie.value)
        return cookies

    @staticmethod
    def parse(
        value: str, url: Optional[AnyURL] = None
    ) -> List[Dict[str, Any]]:
        """
        Parse a C{Set-Cookie} header value.

        @return: A list holding the attributes of the one cookie defined by
            the header.
        """
        return [parseSetCookie(value, url)]
