"""Character-encoding resolution for raw article bytes.

Korean publishers still serve a fair share of pages in EUC-KR / CP949, and
the declared charset is not always where you would expect it.  The resolver
checks, in order:

1. the ``charset=`` token of the ``Content-Type`` header,
2. a ``charset`` declaration in the first 5000 bytes of the document,
3. a short list of hosts that are legacy-encoded whatever they declare,

and falls back to UTF-8.  Only legacy Korean encodings are ever returned
besides ``utf-8``; any other declared charset is ignored.
"""

from __future__ import annotations

import re
from urllib.parse import urlparse

DEFAULT_ENCODING = "utf-8"

_PREVIEW_BYTES = 5000

LEGACY_KOREAN_ENCODINGS = frozenset(
    {
        "euc-kr",
        "euckr",
        "euc_kr",
        "cp949",
        "ks_c_5601-1987",
        "ksc5601",
        "ks_c_5601",
        "x-windows-949",
        "windows-949",
        "uhc",
    }
)

# Hosts that serve EUC-KR pages regardless of the declared charset.
FORCED_LEGACY_HOSTS = {
    "kookje.co.kr": "euc-kr",
}

_HEADER_CHARSET = re.compile(r"charset\s*=\s*[\"']?([^\"';\s]+)", re.IGNORECASE)
_META_CHARSET = re.compile(r"charset\s*=\s*[\"']?([^\"'\s/>;]+)", re.IGNORECASE)


def _legacy(name: str | None) -> str | None:
    if not name:
        return None
    name = name.strip().lower()
    return name if name in LEGACY_KOREAN_ENCODINGS else None


def _host_matches(hostname: str, domain: str) -> bool:
    return hostname == domain or hostname.endswith("." + domain)


def resolve_encoding(raw_bytes: bytes, content_type: str, url: str) -> str:
    """Return the encoding name to decode *raw_bytes* with.

    Pure and side-effect free; never raises.
    """
    header_match = _HEADER_CHARSET.search(content_type or "")
    declared = _legacy(header_match.group(1) if header_match else None)
    if declared:
        return declared

    preview = raw_bytes[:_PREVIEW_BYTES].decode("utf-8", errors="replace")
    meta_match = _META_CHARSET.search(preview)
    declared = _legacy(meta_match.group(1) if meta_match else None)
    if declared:
        return declared

    try:
        hostname = (urlparse(url).hostname or "").lower()
    except ValueError:
        hostname = ""
    for domain, encoding in FORCED_LEGACY_HOSTS.items():
        if _host_matches(hostname, domain):
            return encoding

    return DEFAULT_ENCODING


def decode_html(raw_bytes: bytes, encoding: str) -> str:
    """Decode *raw_bytes* lossily.

    Every legacy Korean label is read with ``cp949``, a superset of EUC-KR
    that also covers the extended Hangul syllables real pages contain.
    """
    codec = "cp949" if encoding in LEGACY_KOREAN_ENCODINGS else encoding
    try:
        return raw_bytes.decode(codec, errors="replace")
    except LookupError:
        return raw_bytes.decode(DEFAULT_ENCODING, errors="replace")
