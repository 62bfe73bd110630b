# -*- test-case-name: missive.test.test_jar -*-
# Copyright (c) 2011-2021. See LICENSE for details.

"""
Netscape cookie jar files.

Each line of a jar holds one cookie as seven tab-separated fields: domain,
domain flag, path, secure flag, expiry timestamp, name and value.
The domain of an HTTP-only cookie is prefixed with C{#HttpOnly_}.
"""

from typing import Any, Dict, Iterable, Tuple, Union

from twisted.logger import Logger

from ._cookie import SetCookie, checkName
from ._cookies import SetCookies
from ._icookie import InvalidJarFormat


__all__ = ()


log = Logger()

HTTP_ONLY_PREFIX = "#HttpOnly_"


def _jarLine(name: str, cookie: SetCookie) -> str:
    checkName(name)
    domain = cookie.domain or ""
    fields = [
        HTTP_ONLY_PREFIX + domain if cookie.httpOnly else domain,
        "TRUE" if domain == "." else "FALSE",
        cookie.path or "/",
        "TRUE" if cookie.secure else "FALSE",
        str(cookie.expires or 0),
        name,
        cookie.value,
    ]
    return "\t".join(fields)


def toJar(cookies: Union[SetCookies, Iterable[SetCookie]]) -> str:
    """
    Export cookies which have not expired as a cookie jar.

    @param cookies: A collection of cookies, or cookies which know their
        names.

    @return: One line per cookie, each ending with a newline.

    @raise InvalidCookieName: If a cookie has an invalid name.
    """
    if isinstance(cookies, SetCookies):
        pairs: Iterable[Tuple[Any, SetCookie]] = cookies.items()
    else:
        pairs = ((cookie.name, cookie) for cookie in cookies)

    lines = [
        _jarLine(name, cookie)
        for name, cookie in pairs
        if not cookie.expired()
    ]
    return "".join(line + "\n" for line in lines)


def parseJar(line: str) -> Dict[str, Any]:
    """
    Parse one line of a cookie jar.

    @return: A mapping with C{httponly}, C{domain}, C{path}, C{secure},
        C{expires}, C{name} and C{value} keys.

    @raise InvalidJarFormat: If the line does not have seven fields.
    """
    fields = line.rstrip("\r\n").split("\t")
    if len(fields) != 7:
        raise InvalidJarFormat("Invalid cookie JAR format.")

    domain, _, path, secure, expires, name, value = fields
    httpOnly = domain.startswith(HTTP_ONLY_PREFIX)
    if httpOnly:
        domain = domain[len(HTTP_ONLY_PREFIX) :]

    try:
        timestamp = int(expires)
    except ValueError as e:
        raise InvalidJarFormat(f"Invalid cookie expiry: {expires!r}") from e

    return {
        "httponly": httpOnly,
        "domain": domain,
        "path": path,
        "secure": secure == "TRUE",
        "expires": timestamp,
        "name": name,
        "value": value,
    }


def readJar(text: str) -> SetCookies:
    """
    Load every cookie in a cookie jar.

    Blank lines and comments are skipped.

    @raise InvalidJarFormat: If a line is malformed.
    """
    cookies = SetCookies()
    for line in text.splitlines():
        if not line.strip():
            continue
        if line.startswith("#") and not line.startswith(HTTP_ONLY_PREFIX):
            log.debug("Skipping jar comment {line!r}", line=line)
            continue
        attributes = parseJar(line)
        attributes["domain"] = attributes["domain"] or None
        cookie = SetCookie.fromAttributes(attributes)
        cookies[attributes["name"]] = cookie
    return cookies
