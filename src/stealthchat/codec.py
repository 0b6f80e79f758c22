"""
Message codec: text embedded in the low 12 decimal digits of an amount.

Single messages (up to 4 characters) use four 3-digit ASCII codes.
Longer messages are split into 4-character chunks, each encoded as
sequence (3 digits) | total (3 digits) | two 3-digit ASCII codes, so only
the first two characters of every chunk are carried.
"""

from decimal import Decimal, InvalidOperation, localcontext
from typing import Union

from .models import MessageChunk
from .types import (
    CHARS_PER_CHUNK,
    CHARS_PER_MESSAGE,
    CODE_DIGITS,
    MAX_CHUNKS,
    PAYLOAD_DIGITS,
    WEI_DECIMALS,
    WEI_PER_ETHER,
    InvalidChunkIndexError,
)

PAYLOAD_MODULUS = 10**PAYLOAD_DIGITS


def _char_code(char: str) -> str:
    code = ord(char)
    if code > 127:
        return "000"
    return str(code).zfill(CODE_DIGITS)


def _encode_chars(text: str) -> str:
    return "".join(_char_code(c) for c in text)


def _decode_codes(digits: str) -> str:
    chars = []
    for i in range(0, len(digits), CODE_DIGITS):
        code = int(digits[i:i + CODE_DIGITS])
        # 0 is padding; >= 128 is not ASCII
        if 0 < code < 128:
            chars.append(chr(code))
    return "".join(chars)


def encode_single(message: str) -> int:
    """
    Encode up to four characters as an amount.

    Characters past the fourth are dropped; non-ASCII characters encode
    as 000 and vanish on decode.

    Example:
        >>> f"{encode_single('Gang'):012d}"
        '071097110103'
    """
    digits = _encode_chars(message[:CHARS_PER_MESSAGE]).ljust(PAYLOAD_DIGITS, "0")
    return int(digits)


def encode_chunk(chunk: str, sequence: int, total: int) -> int:
    """
    Encode one chunk of a longer message.

    Args:
        chunk: Up to four characters (only the first two are kept)
        sequence: 1-based chunk position
        total: Number of chunks

    Raises:
        InvalidChunkIndexError: Unless 1 <= sequence <= total <= 31.
    """
    if not 1 <= sequence <= total <= MAX_CHUNKS:
        raise InvalidChunkIndexError(sequence, total)

    header = str(sequence).zfill(CODE_DIGITS) + str(total).zfill(CODE_DIGITS)
    digits = (header + _encode_chars(chunk[:CHARS_PER_CHUNK])).ljust(PAYLOAD_DIGITS, "0")
    return int(digits)


def split_into_chunks(message: str) -> list[str]:
    """Split a message into consecutive pieces of at most four characters."""
    return [message[i:i + CHARS_PER_MESSAGE] for i in range(0, len(message), CHARS_PER_MESSAGE)]


def encode_message(message: str) -> list[MessageChunk]:
    """
    Plan the amounts needed to send a message.

    Blank messages produce no chunks. Chunk i (1-based) is meant for
    nonce start + i - 1 of the sender's stealth sequence.
    """
    if not message.strip():
        return []

    if len(message) <= CHARS_PER_MESSAGE:
        return [MessageChunk(chunk=message, sequence=1, total=1, amount=encode_single(message))]

    pieces = split_into_chunks(message)
    total = len(pieces)
    return [
        MessageChunk(chunk=piece, sequence=index, total=total, amount=encode_chunk(piece, index, total))
        for index, piece in enumerate(pieces, start=1)
    ]


def payload_digits(amount: Union[int, str]) -> str:
    """The low 12 decimal digits of an amount, left-padded with zeros."""
    text = str(amount).strip()
    if not text.isdigit():
        raise ValueError(f"Amount must be a non-negative integer, got {amount!r}")
    return text[-PAYLOAD_DIGITS:].zfill(PAYLOAD_DIGITS)


def decode(amount: Union[int, str]) -> str:
    """
    Decode the message carried by an amount.

    If the first six payload digits read as 0 < sequence <= total <= 31
    the amount is treated as a chunk and "[sequence/total] text" is
    returned. A single message starting with two control characters that
    satisfy that test is misread as a chunk.
    """
    digits = payload_digits(amount)
    sequence = int(digits[0:3])
    total = int(digits[3:6])

    if 0 < sequence <= total <= MAX_CHUNKS:
        return f"[{sequence}/{total}] {_decode_codes(digits[6:12])}"

    return _decode_codes(digits)


def embed_in_amount(payload: int, base: int = WEI_PER_ETHER) -> int:
    """Replace the low 12 digits of `base` with an encoded payload."""
    if not 0 <= payload < PAYLOAD_MODULUS:
        raise ValueError(f"Payload must fit in {PAYLOAD_DIGITS} digits")
    return (base // PAYLOAD_MODULUS) * PAYLOAD_MODULUS + payload


def wei_to_display(wei: int) -> str:
    """Format wei as ether with all 18 decimals, e.g. 10**18 -> '1.000000000000000000'."""
    if wei < 0:
        raise ValueError(f"Amount must be non-negative, got {wei}")
    whole, fraction = divmod(wei, WEI_PER_ETHER)
    return f"{whole}.{str(fraction).zfill(WEI_DECIMALS)}"


def display_to_wei(value: str) -> int:
    """Parse an ether amount string into wei without floating point."""
    try:
        amount = Decimal(value.strip())
    except InvalidOperation as exc:
        raise ValueError(f"Invalid amount: {value!r}") from exc

    if not amount.is_finite() or amount < 0:
        raise ValueError(f"Amount must be a non-negative number, got {value!r}")

    with localcontext() as ctx:
        ctx.prec = 80
        wei = amount.scaleb(WEI_DECIMALS)
    if wei != wei.to_integral_value():
        raise ValueError(f"Amount has more than {WEI_DECIMALS} decimals: {value!r}")
    return int(wei)
