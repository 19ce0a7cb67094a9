"""Eddystone-URL compact encoding.

Encoded URL layout (the part of the frame after frame type and TX power):
    Offset  Length  Description
    0       1       Scheme prefix code
    1..     N       Expansion codes or literal characters

Codes 0x00-0x0D in the body expand to common top-level domains; any other
byte value is a literal character.
"""

SCHEME_PREFIXES = {
    0x00: "http://www.",
    0x01: "https://www.",
    0x02: "http://",
    0x03: "https://",
}

# Published Eddystone table: codes 0-6 carry a trailing slash, 7-13 do not
URL_EXPANSIONS = (
    ".com/",
    ".org/",
    ".edu/",
    ".net/",
    ".info/",
    ".biz/",
    ".gov/",
    ".com",
    ".org",
    ".edu",
    ".net",
    ".info",
    ".biz",
    ".gov",
)

# Longest first so ".com/" wins over ".com" when encoding
_EXPANSIONS_BY_LENGTH = sorted(
    enumerate(URL_EXPANSIONS), key=lambda item: len(item[1]), reverse=True
)

MAX_LITERAL = 0x7F


def decode_url(data: bytes, start: int = 0) -> str:
    """Decode an encoded Eddystone URL.

    Args:
        data: Buffer holding the encoded URL
        start: Offset of the scheme prefix byte

    Returns:
        The expanded URL. Unknown scheme codes are dropped; an empty
        buffer decodes to an empty string.
    """
    if start >= len(data):
        return ""

    parts = [SCHEME_PREFIXES.get(data[start], "")]
    for code in data[start + 1:]:
        if code < len(URL_EXPANSIONS):
            parts.append(URL_EXPANSIONS[code])
        else:
            parts.append(chr(code))
    return "".join(parts)


def encode_url(scheme: int, suffix: str) -> bytes:
    """Encode a URL as a scheme code plus compressed suffix.

    Expansions are matched greedily, longest first, which gives the
    shortest encoding for the table above.

    Args:
        scheme: Scheme prefix code (0-3)
        suffix: URL text following the scheme prefix

    Returns:
        Encoded bytes, starting with the scheme code

    Raises:
        ValueError: If the scheme code is unknown or the suffix contains a
                    character that can't be sent literally
    """
    if scheme not in SCHEME_PREFIXES:
        raise ValueError(f"Unknown URL scheme code: {scheme}")

    encoded = bytearray([scheme])
    pos = 0
    while pos < len(suffix):
        for code, expansion in _EXPANSIONS_BY_LENGTH:
            if suffix.startswith(expansion, pos):
                encoded.append(code)
                pos += len(expansion)
                break
        else:
            char = suffix[pos]
            value = ord(char)
            if value < len(URL_EXPANSIONS) or value > MAX_LITERAL:
                raise ValueError(f"Character {char!r} can't be encoded literally")
            encoded.append(value)
            pos += 1
    return bytes(encoded)


def split_url(url: str) -> tuple[int, str]:
    """Split a full URL into (scheme code, suffix).

    The longest matching prefix wins, so "https://www.x" maps to code 1
    rather than code 3.

    Raises:
        ValueError: If the URL starts with none of the known prefixes
    """
    for code, prefix in sorted(
        SCHEME_PREFIXES.items(), key=lambda item: len(item[1]), reverse=True
    ):
        if url.startswith(prefix):
            return code, url[len(prefix):]
    raise ValueError(f"URL has no encodable scheme prefix: {url}")
