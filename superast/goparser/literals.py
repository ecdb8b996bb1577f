"""Go literal decoding: the text of INT/FLOAT/CHAR/STRING tokens to Python values."""
import math
import re

_SIMPLE_ESCAPES = {
    "a": 0x07,
    "b": 0x08,
    "f": 0x0C,
    "n": 0x0A,
    "r": 0x0D,
    "t": 0x09,
    "v": 0x0B,
    "\\": 0x5C,
    "'": 0x27,
    '"': 0x22,
}

_ESCAPE_RE = re.compile(
    r"\\(?:([abfnrtv\\'\"])|([0-7]{3})|x([0-9a-fA-F]{2})|u([0-9a-fA-F]{4})|U([0-9a-fA-F]{8}))"
)


def _code_point(digits: str) -> int:
    cp = int(digits, 16)
    if cp > 0x10FFFF or 0xD800 <= cp <= 0xDFFF:
        raise ValueError(f"escape sequence is invalid Unicode code point: {digits}")
    return cp


def _escape_value(match: re.Match, quote: str):
    """Returns (value, is_byte) for one escape sequence."""
    simple, octal, hex_byte, u16, u32 = match.groups()
    if simple:
        if simple in "'\"" and simple != quote:
            raise ValueError(f"unknown escape sequence: \\{simple}")
        return _SIMPLE_ESCAPES[simple], True
    if octal:
        value = int(octal, 8)
        if value > 255:
            raise ValueError(f"octal escape value > 255: {value}")
        return value, True
    if hex_byte:
        return int(hex_byte, 16), True
    return _code_point(u16 or u32), False


def _check_plain(segment: str):
    if "\\" in segment:
        raise ValueError("unknown escape sequence")


def unquote_string(raw: str) -> str:
    """
    Decodes a Go string literal, quotes included.

    Raw strings keep their content verbatim except for carriage returns.
    Interpreted strings are decoded as bytes first (\\x and octal escapes are
    single bytes), then read as UTF-8; invalid sequences become U+FFFD.
    """
    if raw.startswith("`"):
        return raw[1:-1].replace("\r", "")

    body = raw[1:-1]
    out = bytearray()
    pos = 0
    for match in _ESCAPE_RE.finditer(body):
        _check_plain(body[pos:match.start()])
        out += body[pos:match.start()].encode("utf-8")
        value, is_byte = _escape_value(match, '"')
        if is_byte:
            out.append(value)
        else:
            out += chr(value).encode("utf-8")
        pos = match.end()
    _check_plain(body[pos:])
    out += body[pos:].encode("utf-8")
    return out.decode("utf-8", errors="replace")


def unquote_char(raw: str) -> int:
    """Decodes a Go rune literal to its code point."""
    body = raw[1:-1]
    if not body.startswith("\\"):
        if len(body) != 1:
            raise ValueError(f"more than one character in rune literal: {raw}")
        return ord(body)
    match = _ESCAPE_RE.fullmatch(body)
    if match is None:
        raise ValueError(f"unknown escape sequence in rune literal: {raw}")
    value, _ = _escape_value(match, "'")
    return value


# "_" may only follow a base prefix or separate two digits
_INT_RE = re.compile(
    r"0[xX](?:_?[0-9a-fA-F])+|0[bB](?:_?[01])+|0[oO](?:_?[0-7])+|0(?:_?[0-7])*|[1-9](?:_?[0-9])*"
)
_MISPLACED_UNDERSCORE = re.compile(r"(?<![0-9])_|_(?![0-9])")


def parse_int(raw: str) -> int:
    if not _INT_RE.fullmatch(raw):
        raise ValueError(f"invalid integer literal: {raw}")
    text = raw.replace("_", "")
    # legacy octal: 0755
    if len(text) > 1 and text[0] == "0" and text[1].isdigit():
        return int(text, 8)
    return int(text, 0)


def parse_float(raw: str) -> float:
    if _MISPLACED_UNDERSCORE.search(raw):
        raise ValueError(f"'_' must separate successive digits: {raw}")
    value = float(raw.replace("_", ""))
    if math.isinf(value):
        raise ValueError(f"value out of range: {raw}")
    return value
