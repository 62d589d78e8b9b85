"""
Token Transfer Call Decoder

Decodes the call data of a standard token ``transfer(address,uint256)`` call:

    a9059cbb | 32-byte padded recipient | 32-byte big-endian amount

Only the low 20 bytes of the recipient word are significant. By default the
high 12 bytes are discarded without being checked; ``strict_padding`` rejects
non-zero padding instead.
"""

import re
from dataclasses import dataclass

from payments.errors import MalformedCallData, UnsupportedCallSignature
from payments.tron_address import ADDRESS_HEX_PREFIX

TRANSFER_METHOD_SELECTOR = "a9059cbb"

SELECTOR_HEX_LENGTH = 8
WORD_HEX_LENGTH = 64
ADDRESS_WORD_PADDING = 24  # hex chars of the 12 high bytes
TRANSFER_CALL_HEX_LENGTH = SELECTOR_HEX_LENGTH + 2 * WORD_HEX_LENGTH

_HEX_RE = re.compile(r"[0-9a-f]*")


@dataclass(frozen=True)
class DecodedTransfer:
    to_address_hex: str  # version-byte prefixed, ready for AddressCodec
    amount: int


@dataclass(frozen=True)
class CallDataDecoder:
    address_prefix: str = ADDRESS_HEX_PREFIX
    strict_padding: bool = False

    def decode_transfer_call(self, payload: str) -> DecodedTransfer:
        """
        Decode a token transfer payload.

        Raises:
            UnsupportedCallSignature: selector is not ``transfer(address,uint256)``
            MalformedCallData: non-hex data, truncated words, or (strict) dirty padding
        """
        data = payload.lower()
        if data.startswith("0x"):
            data = data[2:]

        if data[:SELECTOR_HEX_LENGTH] != TRANSFER_METHOD_SELECTOR:
            raise UnsupportedCallSignature(
                f"not a token transfer call: {data[:SELECTOR_HEX_LENGTH]!r}"
            )
        if _HEX_RE.fullmatch(data) is None:
            raise MalformedCallData("call data is not hex")
        if len(data) < TRANSFER_CALL_HEX_LENGTH:
            raise MalformedCallData(
                f"transfer call needs {TRANSFER_CALL_HEX_LENGTH} hex chars, got {len(data)}"
            )

        address_word = data[SELECTOR_HEX_LENGTH : SELECTOR_HEX_LENGTH + WORD_HEX_LENGTH]
        amount_word = data[
            SELECTOR_HEX_LENGTH + WORD_HEX_LENGTH : TRANSFER_CALL_HEX_LENGTH
        ]

        padding = address_word[:ADDRESS_WORD_PADDING]
        if self.strict_padding and padding.strip("0"):
            raise MalformedCallData(f"non-zero address padding: {padding}")

        return DecodedTransfer(
            to_address_hex=self.address_prefix + address_word[ADDRESS_WORD_PADDING:],
            amount=int(amount_word, 16),
        )


default_decoder = CallDataDecoder()


def decode_transfer_call(payload: str) -> DecodedTransfer:
    return default_decoder.decode_transfer_call(payload)
