# Copyright (c) 2011-2021. See LICENSE for details.

"""
MIME content transfer encodings.
"""

from ._mime import decode, encode, optimalCharset, optimalEncoding


__all__ = (
    "decode",
    "encode",
    "optimalCharset",
    "optimalEncoding",
)
