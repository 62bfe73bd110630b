# -*- test-case-name: missive.test.test_part -*-
# Copyright (c) 2011-2021. See LICENSE for details.

"""
Body parts backed by in-memory data or file-like objects.
"""

from copy import copy as shallowCopy
from io import BytesIO
from typing import BinaryIO, List, Mapping, Optional, Union

from attrs import Factory, define, evolve, field
from zope.interface import implementer

from ._imime import IPart, UnsupportedEncoding
from ._mime import BODY_ENCODING, ENCODINGS, encode


__all__ = ()


PartData = Union[bytes, str, int, float, BinaryIO]


@define
class PartOptions:
    """
    Metadata describing a part within a multipart body.

    @ivar disposition: The C{Content-Disposition} type, such as
        C{"form-data"}; C{None} for no disposition header.
    @ivar length: Whether to send a C{Content-Length} header.
    @ivar headers: Extra header lines, rendered before all others.
    """

    id: Optional[str] = None
    name: Optional[str] = None
    filename: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    language: Optional[str] = None
    length: bool = False
    disposition: Optional[str] = None
    headers: Union[List[str], Mapping[str, str]] = field(default=Factory(list))


def sourceFromData(data: PartData) -> BinaryIO:
    """
    Wrap data in a binary file-like object, unless it already is one.
    """
    if hasattr(data, "read"):
        return data  # type: ignore[return-value]
    if isinstance(data, bytes):
        return BytesIO(data)
    if isinstance(data, str):
        return BytesIO(data.encode(BODY_ENCODING))
    if isinstance(data, (int, float)):
        return BytesIO(str(data).encode("ascii"))
    raise TypeError(f"Can't read part data from {data!r}")


def checkEncoding(encoding: Optional[str]) -> Optional[str]:
    if encoding is None:
        return None
    encoding = encoding.lower()
    if encoding not in ENCODINGS:
        raise UnsupportedEncoding(f"Unknown transfer encoding: {encoding!r}")
    return encoding


@implementer(IPart)
class Part:
    """
    A body part.

    Text data defaults to the C{text/plain} media type; anything else defaults
    to C{application/octet-stream}.
    """

    def __init__(
        self,
        data: PartData = b"",
        mime: Optional[str] = None,
        charset: Optional[str] = None,
        encoding: Optional[str] = None,
        options: Optional[PartOptions] = None,
    ) -> None:
        self._source = sourceFromData(data)
        self._exhausted = False
        if isinstance(data, str):
            self.defaultMime = "text/plain"
        else:
            self.defaultMime = "application/octet-stream"
        self.mime = mime
        self.charset = charset
        self.encoding = encoding
        self.options = PartOptions() if options is None else options

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.contentType()}>"

    @property
    def charset(self) -> Optional[str]:
        return self._charset

    @charset.setter
    def charset(self, charset: Optional[str]) -> None:
        self._charset = charset.upper() if charset else None

    @property
    def encoding(self) -> Optional[str]:
        return self._encoding

    @encoding.setter
    def encoding(self, encoding: Optional[str]) -> None:
        self._encoding = checkEncoding(encoding)

    def contentType(self) -> str:
        """
        The declared media type, or the default one for this part's data.
        """
        return self.mime or self.defaultMime

    def read(self, size: int = -1) -> bytes:
        data = self._source.read(size)
        if size < 0 or len(data) < size:
            self._exhausted = True
        return data

    def eof(self) -> bool:
        if self.isSeekable():
            return self._source.tell() >= self.length()  # type: ignore
        return self._exhausted

    def isSeekable(self) -> bool:
        seekable = getattr(self._source, "seekable", None)
        return bool(seekable and seekable())

    def rewind(self) -> None:
        self._source.seek(0)
        self._exhausted = False

    def length(self) -> Optional[int]:
        if not self.isSeekable():
            return None
        position = self._source.tell()
        end = self._source.seek(0, 2)
        self._source.seek(position)
        return end

    def close(self) -> None:
        self._source.close()

    def content(self) -> bytes:
        """
        The whole raw content, from the start if this part is seekable.
        """
        if self.isSeekable():
            self.rewind()
        return self.read()

    def flush(self) -> bytes:
        data = self.read()
        if self.encoding is None:
            return data
        return encode(data, self.encoding)

    def toBytes(self, encoding: Optional[str] = None) -> bytes:
        data = self.content()
        encoding = checkEncoding(encoding) or self.encoding
        if encoding is None:
            return data
        return encode(data, encoding)

    def __copy__(self) -> "Part":
        if self.isSeekable():
            position = self._source.tell()
            self._source.seek(0)
            data = self._source.read()
            self._source.seek(position)
        else:
            position = 0
            data = self._source.read()
            self._source = BytesIO(data)

        clone = self.__class__(
            BytesIO(data),
            mime=self.mime,
            charset=self.charset,
            encoding=self.encoding,
            options=evolve(
                self.options, headers=shallowCopy(self.options.headers)
            ),
        )
        clone.defaultMime = self.defaultMime
        clone._source.seek(position)
        return clone

    copy = __copy__

