"""
Character encoding service for the decoded text column.

Encodings are looked up by the names accepted on the command line and
backed by the Python codec of the same character set. EBCDIC code
pages missing from the standard library come from the ``ebcdic``
package. ``utf8`` is the identity mapping: every byte is shown as the
code point of its value.
"""

import codecs
from typing import Dict, Final, List, Optional

import ebcdic  # noqa: F401  registers the cp1047 codec

from .errors import EncodingError

IDENTITY: Final[str] = 'utf8'

ENCODINGS: Final[Dict[str, Optional[str]]] = {
    'utf8': None,
    'utf-8': None,
    'cp037': 'cp037',
    'cp1047': 'cp1047',
    'cp1140': 'cp1140',
    'cp437': 'cp437',
    'cp850': 'cp850',
    'cp852': 'cp852',
    'cp855': 'cp855',
    'cp858': 'cp858',
    'cp860': 'cp860',
    'cp862': 'cp862',
    'cp863': 'cp863',
    'cp865': 'cp865',
    'cp866': 'cp866',
    'iso-8859-1': 'iso8859_1',
    'iso8859-1': 'iso8859_1',
    'iso-8859-2': 'iso8859_2',
    'iso8859-2': 'iso8859_2',
    'iso-8859-3': 'iso8859_3',
    'iso8859-3': 'iso8859_3',
    'iso-8859-4': 'iso8859_4',
    'iso8859-4': 'iso8859_4',
    'iso-8859-5': 'iso8859_5',
    'iso8859-5': 'iso8859_5',
    'iso-8859-6': 'iso8859_6',
    'iso8859-6': 'iso8859_6',
    'iso-8859-7': 'iso8859_7',
    'iso8859-7': 'iso8859_7',
    'iso-8859-8': 'iso8859_8',
    'iso8859-8': 'iso8859_8',
    'iso-8859-9': 'iso8859_9',
    'iso8859-9': 'iso8859_9',
    'iso-8859-10': 'iso8859_10',
    'iso8859-10': 'iso8859_10',
    'iso-8859-13': 'iso8859_13',
    'iso8859-13': 'iso8859_13',
    'iso-8859-14': 'iso8859_14',
    'iso8859-14': 'iso8859_14',
    'iso-8859-15': 'iso8859_15',
    'iso8859-15': 'iso8859_15',
    'iso-8859-16': 'iso8859_16',
    'iso8859-16': 'iso8859_16',
    'koi8-r': 'koi8_r',
    'koi8r': 'koi8_r',
    'koi8-u': 'koi8_u',
    'koi8u': 'koi8_u',
    'macintosh': 'mac_roman',
    'macintosh-cyrillic': 'mac_cyrillic',
    'windows-1250': 'cp1250',
    'windows1250': 'cp1250',
    'windows-1251': 'cp1251',
    'windows1251': 'cp1251',
    'windows-1252': 'cp1252',
    'windows1252': 'cp1252',
    'windows-1253': 'cp1253',
    'windows1253': 'cp1253',
    'windows-1254': 'cp1254',
    'windows1254': 'cp1254',
    'windows-1255': 'cp1255',
    'windows1255': 'cp1255',
    'windows-1256': 'cp1256',
    'windows1256': 'cp1256',
    'windows-1257': 'cp1257',
    'windows1257': 'cp1257',
    'windows-1258': 'cp1258',
    'windows1258': 'cp1258',
    'windows-874': 'cp874',
    'windows874': 'cp874',
}


def lookup(name: str) -> Optional[codecs.CodecInfo]:
    """
    Resolve an encoding name.

    Args:
        name: Encoding name as given on the command line (case-insensitive)

    Returns:
        The codec for the character set, or None for the identity mapping

    Raises:
        EncodingError: If the name is not a supported encoding
    """

    key = name.lower()
    if key not in ENCODINGS:
        raise EncodingError(name)

    codec_name = ENCODINGS[key]
    if codec_name is None:
        return None

    return codecs.lookup(codec_name)


def decode(raw: bytes, name: str) -> str:
    """Convert bytes in the named encoding to text, one character per byte."""

    codec = lookup(name)
    if codec is None:
        return raw.decode('latin-1')

    text, _ = codec.decode(raw, 'replace')
    return text


def encode(text: str, name: str) -> bytes:
    """Convert text to bytes in the named encoding."""

    codec = lookup(name)
    if codec is None:
        return text.encode('latin-1', 'replace')

    data, _ = codec.encode(text, 'replace')
    return data


def printable(text: str) -> str:
    """Replace every character outside printable ASCII with a dot."""

    return ''.join(c if 32 <= ord(c) <= 126 else '.' for c in text)


def names() -> List[str]:
    """List the supported encoding names, aliases joined with ' / '."""

    grouped: Dict[Optional[str], List[str]] = {}
    for name, codec_name in ENCODINGS.items():
        grouped.setdefault(codec_name, []).append(name)

    return [' / '.join(f'"{alias}"' for alias in aliases) for aliases in grouped.values()]
