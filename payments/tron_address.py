"""
Ledger Address Codec

This module converts account addresses between the two forms the ledger uses:
- binary/hex form: one version byte followed by 20 identity bytes
- text form: Base58Check of the binary form plus a 4-byte double-SHA-256 checksum

The defaults are TRON mainnet conventions. Every constant is exposed by name and
an ``AddressCodec`` can be built with different values for another network.
"""

import hashlib
import re
from dataclasses import dataclass

import base58

from payments.errors import ChecksumMismatch, InvalidEncoding, MalformedAddress

# Ledger constants (TRON mainnet)
ADDRESS_VERSION_BYTE = 0x41
ADDRESS_HEX_PREFIX = f"{ADDRESS_VERSION_BYTE:02x}"
TEXT_ADDRESS_PREFIX = "T"
TEXT_ADDRESS_LENGTH = 34
BINARY_ADDRESS_LENGTH = 21
HEX_ADDRESS_LENGTH = BINARY_ADDRESS_LENGTH * 2
CHECKSUM_LENGTH = 4

BASE58_ALPHABET = base58.BITCOIN_ALPHABET.decode("ascii")

_HEX_RE = re.compile(r"[0-9a-fA-F]*")


def checksum(payload: bytes) -> bytes:
    """First 4 bytes of SHA-256(SHA-256(payload))."""
    digest = hashlib.sha256(hashlib.sha256(payload).digest()).digest()
    return digest[:CHECKSUM_LENGTH]


def _strip_hex_prefix(value: str) -> str:
    return value[2:] if value.startswith("0x") else value


@dataclass(frozen=True)
class AddressCodec:
    """Base58Check codec bound to one network's address parameters."""

    version_byte: int = ADDRESS_VERSION_BYTE
    text_prefix: str = TEXT_ADDRESS_PREFIX
    text_length: int = TEXT_ADDRESS_LENGTH

    @classmethod
    def from_settings(cls, settings) -> "AddressCodec":
        return cls(
            version_byte=settings.ADDRESS_VERSION_BYTE,
            text_prefix=settings.TEXT_ADDRESS_PREFIX,
            text_length=settings.TEXT_ADDRESS_LENGTH,
        )

    @property
    def hex_prefix(self) -> str:
        return f"{self.version_byte:02x}"

    def to_text_form(self, binary: bytes) -> str:
        """
        Encode a 21-byte binary address as checksummed text.

        Raises:
            MalformedAddress: wrong length or wrong version byte
        """
        if len(binary) != BINARY_ADDRESS_LENGTH:
            raise MalformedAddress(
                f"address must be {BINARY_ADDRESS_LENGTH} bytes, got {len(binary)}"
            )
        if binary[0] != self.version_byte:
            raise MalformedAddress(
                f"address must start with version byte {self.hex_prefix}"
            )
        return base58.b58encode(bytes(binary) + checksum(binary)).decode("ascii")

    def to_binary_form(self, text: str) -> bytes:
        """
        Decode checksummed text back to the bytes preceding the checksum.

        Raises:
            InvalidEncoding: character outside the base-58 alphabet, or too short
            ChecksumMismatch: trailing 4 bytes do not match the recomputed checksum
        """
        for char in text:
            if char not in BASE58_ALPHABET:
                raise InvalidEncoding(f"invalid base58 character: {char!r}")

        decoded = base58.b58decode(text)
        if len(decoded) <= CHECKSUM_LENGTH:
            raise InvalidEncoding("encoded value too short to carry a checksum")

        payload, check = decoded[:-CHECKSUM_LENGTH], decoded[-CHECKSUM_LENGTH:]
        if checksum(payload) != check:
            raise ChecksumMismatch("invalid address checksum")
        return payload

    def is_valid_text_form(self, text: object) -> bool:
        if not isinstance(text, str):
            return False
        if not text.startswith(self.text_prefix) or len(text) != self.text_length:
            return False
        try:
            binary = self.to_binary_form(text)
        except (InvalidEncoding, ChecksumMismatch):
            return False
        return len(binary) == BINARY_ADDRESS_LENGTH and binary[0] == self.version_byte

    def is_valid_hex_form(self, value: object) -> bool:
        if not isinstance(value, str):
            return False
        clean = _strip_hex_prefix(value)
        return (
            len(clean) == HEX_ADDRESS_LENGTH
            and _HEX_RE.fullmatch(clean) is not None
            and clean.lower().startswith(self.hex_prefix)
        )

    def hex_to_text(self, value: str) -> str:
        clean = _strip_hex_prefix(value)
        if _HEX_RE.fullmatch(clean) is None or len(clean) % 2:
            raise MalformedAddress(f"not a hex address: {value}")
        return self.to_text_form(bytes.fromhex(clean))

    def text_to_hex(self, text: str) -> str:
        return self.to_binary_form(text).hex()

    def normalize(self, address: object) -> str | None:
        """Return the text form of ``address``, or None if it is in neither form."""
        if self.is_valid_hex_form(address):
            return self.hex_to_text(address)
        if self.is_valid_text_form(address):
            return address
        return None


default_codec = AddressCodec()


def encode_address(binary: bytes) -> str:
    return default_codec.to_text_form(binary)


def decode_address(text: str) -> bytes:
    return default_codec.to_binary_form(text)


def is_text_address(value: object) -> bool:
    return default_codec.is_valid_text_form(value)


def is_hex_address(value: object) -> bool:
    return default_codec.is_valid_hex_form(value)
