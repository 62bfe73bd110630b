# -*- test-case-name: missive.test.test_mixedpart -*-
# Copyright (c) 2011-2021. See LICENSE for details.

"""
Single and multipart MIME bodies.
"""

from re import IGNORECASE, compile as compileRegex
from secrets import token_hex
from typing import Any, List, Mapping, Optional, Tuple, Union

from zope.interface import implementer

from twisted.logger import Logger

from ._header import headerValueAsBytes, sanitizeValue
from ._headers import Headers
from ._imime import IMultipart, MissingName
from ._mime import encode, optimalCharset
from ._part import Part, PartOptions


__all__ = ()


log = Logger()

Child = Union[Part, "MixedPart"]

_contentType = compileRegex(
    r"([-\w/.+]+)(;\s*?charset=([^;\s]+))?", IGNORECASE
)


def isMultipartType(mime: Optional[str]) -> bool:
    return bool(mime) and mime.lower().startswith("multipart/")  # type: ignore


def quoteParameter(value: str) -> str:
    """
    Quote a C{Content-Disposition} parameter value.
    """
    value = sanitizeValue(value)
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def baseName(filename: str) -> str:
    return filename.replace("\\", "/").rsplit("/", 1)[-1]


@implementer(IMultipart)
class MixedPart:
    """
    A body made of zero or more parts.

    With more than one part, or with a C{multipart/*} media type, the body is
    rendered as a multipart body: each part framed by the boundary, with
    headers describing it.
    Otherwise the body is the content of its only part, and the media type,
    charset and transfer encoding of that part are copied into the body's
    headers.

    @ivar headers: The headers of the body.
    """

    def __init__(
        self,
        mime: Optional[str] = None,
        charset: Optional[str] = None,
        boundary: Optional[str] = None,
        headers: Any = None,
    ) -> None:
        if not isinstance(headers, Headers):
            headers = Headers(headers)
        self.headers = headers
        self._children: List[Child] = []
        self._boundary = boundary

        contentType = headers.get("Content-Type")
        if contentType is not None:
            inspected = self._inspect(contentType.value())
            mime = mime or inspected[0]
            charset = charset or inspected[1]

        self._mime = mime
        self._charset = charset.upper() if charset else None
        self._synchronize()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.mime} {self._children!r}>"

    @staticmethod
    def _inspect(contentType: str) -> Tuple[Optional[str], Optional[str]]:
        match = _contentType.match(contentType.strip())
        if match is None:
            return None, None
        return match.group(1), match.group(3)

    def parts(self) -> List[Child]:
        return list(self._children)

    def isMultipart(self) -> bool:
        return len(self._children) > 1 or isMultipartType(self._mime)

    def _single(self) -> Optional[Part]:
        if len(self._children) == 1 and isinstance(self._children[0], Part):
            return self._children[0]
        return None

    @property
    def mime(self) -> Optional[str]:
        """
        The media type of the body.

        A multipart body given a non-multipart media type is
        C{multipart/form-data}.
        """
        if self.isMultipart():
            if isMultipartType(self._mime):
                return self._mime
            return "multipart/form-data"
        child = self._single()
        if child is not None and child.mime:
            return child.mime
        if self._mime:
            return self._mime
        if child is not None:
            return child.contentType()
        return None

    @mime.setter
    def mime(self, mime: Optional[str]) -> None:
        self._mime = mime or None
        self._synchronize()

    @property
    def charset(self) -> Optional[str]:
        if not self.isMultipart():
            child = self._single()
            if child is not None and child.charset:
                return child.charset
        return self._charset

    @charset.setter
    def charset(self, charset: Optional[str]) -> None:
        self._charset = charset.upper() if charset else None
        self._synchronize()

    def boundary(self) -> Optional[str]:
        if not self.isMultipart():
            return None
        if self._boundary is None:
            self._boundary = token_hex(20)
            log.debug("Generated boundary {boundary}", boundary=self._boundary)
        return self._boundary

    def _synchronize(self) -> None:
        """
        Update the C{Content-Type} and C{Content-Transfer-Encoding} headers to
        describe the body.
        """
        contentType = None
        transferEncoding = None

        if self.isMultipart():
            contentType = f"{self.mime}; boundary={self.boundary()}"
        else:
            mime = self.mime
            if mime:
                charset = self.charset
                contentType = f"{mime}; charset={charset}" if charset else mime
            child = self._single()
            if child is not None:
                transferEncoding = child.encoding

        for name, value in (
            ("Content-Type", contentType),
            ("Content-Transfer-Encoding", transferEncoding),
        ):
            if value is None:
                self.headers.remove(name)
            else:
                self.headers[name] = value

    def add(
        self,
        source: Any,
        mime: Optional[str] = None,
        charset: Optional[str] = None,
        encoding: Optional[str] = None,
        **options: Any,
    ) -> Child:
        """
        Add a part.

        @param source: A L{Part}, a nested L{MixedPart}, or the data of a new
            part: text, bytes, a number or a binary file-like object.
        @param mime: The media type of the part, unless it declares one.
        @param charset: The charset of the part, unless it declares one.
        @param encoding: The transfer encoding of the part, unless it
            declares one.
        @param options: The attributes of L{PartOptions}.

        @return: The added part.

        @raise MissingName: If a C{disposition} is given without a C{name},
            or if this is a C{multipart/form-data} body and no C{name} is
            given.
        """
        formData = (self._mime or "").lower() == "multipart/form-data"
        if (formData or options.get("disposition")) and not options.get(
            "name"
        ):
            raise MissingName("The 'name' option is required.")

        if isinstance(source, MixedPart):
            child: Child = source
        else:
            part = source if isinstance(source, Part) else Part(source)
            if mime and not part.mime:
                part.mime = mime
            if charset and not part.charset:
                part.charset = charset
            if encoding and not part.encoding:
                part.encoding = encoding
            if options:
                part.options = PartOptions(**options)
            child = part

        self._children.append(child)
        self._synchronize()
        return child

    def remove(self, child: Child) -> None:
        """
        Remove a part.

        @raise ValueError: If the part is not in this body.
        """
        self._children.remove(child)
        self._synchronize()

    def _partHeaders(
        self, part: Part, content: bytes, charset: Optional[str], encoding: str
    ) -> List[str]:
        options = part.options
        if isinstance(options.headers, Mapping):
            lines = [
                f"{name}: {sanitizeValue(str(value))}"
                for name, value in options.headers.items()
            ]
        else:
            lines = [sanitizeValue(line) for line in options.headers]

        if options.disposition:
            disposition = [
                options.disposition,
                f"name={quoteParameter(options.name or '')}",
            ]
            if options.filename:
                filename = quoteParameter(baseName(options.filename))
                disposition.append(f"filename={filename}")
            lines.append("Content-Disposition: " + "; ".join(disposition))

        if options.id:
            lines.append(f"Content-ID: {options.id}")

        mime = part.contentType()
        lines.append(
            f"Content-Type: {mime}; charset={charset}"
            if charset
            else f"Content-Type: {mime}"
        )
        lines.append(f"Content-Transfer-Encoding: {encoding}")

        if options.length:
            lines.append(f"Content-Length: {len(content)}")
        if options.description:
            lines.append(f"Content-Description: {options.description}")
        if options.location:
            lines.append(f"Content-Location: {options.location}")
        if options.language:
            lines.append(f"Content-Language: {options.language}")

        return lines

    def _renderPart(self, part: Part) -> bytes:
        raw = part.content()
        mime = part.contentType()
        isText = mime.lower().startswith("text/")

        encoding = part.encoding
        if encoding is None:
            encoding = "quoted-printable" if isText else "base64"
        charset = part.charset
        if charset is None and isText:
            charset = optimalCharset(raw)

        content = encode(raw, encoding)
        lines = self._partHeaders(part, content, charset, encoding)
        head = "".join(line + "\r\n" for line in lines)
        return head.encode("utf-8") + b"\r\n" + content + b"\r\n"

    def flush(self) -> bytes:
        """
        Render the body.

        Parts are read from the start whenever they are seekable, so a body
        made of seekable parts renders the same every time.
        """
        if not self.isMultipart():
            child = self._children[0] if self._children else None
            if child is None:
                return b""
            if isinstance(child, MixedPart):
                return child.toMessage()
            return child.toBytes()

        delimiter = b"--" + self.boundary().encode("ascii")  # type: ignore
        chunks = []
        for child in self._children:
            chunks.append(delimiter + b"\r\n")
            if IMultipart.providedBy(child):
                chunks.append(child.toMessage() + b"\r\n")
            else:
                chunks.append(self._renderPart(child))  # type: ignore
        chunks.append(delimiter + b"--\r\n")
        return b"".join(chunks)

    def toMessage(self) -> bytes:
        """
        Render the headers and the body.
        """
        self._synchronize()
        head = headerValueAsBytes(self.headers.toHeader())
        return head + b"\r\n" + self.flush()

    def close(self) -> None:
        for child in self._children:
            child.close()

    def __copy__(self) -> "MixedPart":
        clone = self.__class__.__new__(self.__class__)
        clone.__dict__.update(self.__dict__)
        clone.headers = self.headers.copy()
        clone._children = [child.copy() for child in self._children]
        return clone

    copy = __copy__
