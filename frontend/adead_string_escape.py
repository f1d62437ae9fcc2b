#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

"""
String escape helpers shared by the lexer, the parser and the formatter.

The lexer keeps string token text exactly as written (quotes and escape
sequences included) after validating it. The parser decodes the payload
into the literal's value; the formatter encodes a value back into a
string-literal body the lexer accepts.
"""

from adead_internal_error import InternalFrontendError


HEX_CHARS = "0123456789abcdefABCDEF"
SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "\\": "\\",
    '"': '"',
}
_REVERSE_ESCAPES = {value: f"\\{key}" for key, value in SIMPLE_ESCAPES.items()}


def decode_string_token(text: str) -> str:
    """
    Decode a string token payload (without surrounding quotes) to its value.

    Input is lexer-validated text, so only the five simple escapes and
    `\\uXXXX` can occur; anything else means the token did not come from the
    lexer and raises InternalFrontendError [ICE-0030].
    """
    out: list[str] = []
    i = 0

    while i < len(text):
        ch = text[i]
        if ch != "\\":
            out.append(ch)
            i += 1
            continue

        i += 1
        if i >= len(text):
            raise InternalFrontendError("[ICE-0030] dangling backslash in string token")

        esc = text[i]

        if esc in SIMPLE_ESCAPES:
            out.append(SIMPLE_ESCAPES[esc])
            i += 1
            continue

        if esc == "u":
            digits = text[i + 1:i + 5]
            if len(digits) != 4 or any(c not in HEX_CHARS for c in digits):
                raise InternalFrontendError("[ICE-0030] invalid unicode escape in string token")
            out.append(chr(int(digits, 16)))
            i += 5
            continue

        raise InternalFrontendError(f"[ICE-0030] unknown escape \\{esc} in string token")

    return "".join(out)


def encode_string_body(value: str) -> str:
    """
    Encode a string value into a string-literal body (without quotes).
    """
    parts: list[str] = []
    for ch in value:
        if ch in _REVERSE_ESCAPES:
            parts.append(_REVERSE_ESCAPES[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7F or 0xD800 <= ord(ch) <= 0xDFFF:
            # Control characters and lone surrogates use the fixed-width unicode escape.
            parts.append(f"\\u{ord(ch):04x}")
        else:
            parts.append(ch)
    return "".join(parts)
