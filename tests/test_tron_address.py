"""
Tests for the checksummed address codec.
"""

import base58
import pytest
from pydantic import ValidationError

from core.settings import Settings
from factories import (
    RECIPIENT_HEX,
    SENDER_HEX,
    USDT_CONTRACT_HEX,
    USDT_CONTRACT_TEXT,
)
from payments.errors import ChecksumMismatch, InvalidEncoding, MalformedAddress
from payments.tron_address import (
    ADDRESS_HEX_PREFIX,
    BASE58_ALPHABET,
    TEXT_ADDRESS_LENGTH,
    AddressCodec,
    checksum,
    decode_address,
    default_codec,
    encode_address,
    is_hex_address,
    is_text_address,
)

ZERO_ADDRESS_HEX = "41" + "00" * 20
ZERO_ADDRESS_TEXT = "T9yD14Nj9j7xAB4dbGeiX9h8unkKHxuWwb"

SAMPLE_ADDRESSES = [
    ZERO_ADDRESS_HEX,
    SENDER_HEX,
    RECIPIENT_HEX,
    USDT_CONTRACT_HEX,
    "41" + "ff" * 20,
    "41" + "00" * 19 + "01",
    "41" + "0123456789abcdef0123456789abcdef01234567",
]


def test_known_contract_address_vector():
    """Test encoding the USDT contract matches its published text form."""
    assert encode_address(bytes.fromhex(USDT_CONTRACT_HEX)) == USDT_CONTRACT_TEXT
    assert decode_address(USDT_CONTRACT_TEXT).hex() == USDT_CONTRACT_HEX


def test_zero_address_vector():
    """Test the all-zero identity encodes to the well-known zero address."""
    assert encode_address(bytes.fromhex(ZERO_ADDRESS_HEX)) == ZERO_ADDRESS_TEXT
    assert decode_address(ZERO_ADDRESS_TEXT) == bytes.fromhex(ZERO_ADDRESS_HEX)


@pytest.mark.parametrize("hex_address", SAMPLE_ADDRESSES)
def test_round_trip(hex_address):
    """Test decode(encode(a)) == a for valid binary addresses."""
    binary = bytes.fromhex(hex_address)
    text = encode_address(binary)

    assert text.startswith("T")
    assert len(text) == TEXT_ADDRESS_LENGTH
    assert decode_address(text) == binary
    assert is_text_address(text)


def test_encoding_is_deterministic():
    binary = bytes.fromhex(SENDER_HEX)
    assert encode_address(binary) == encode_address(binary)


@pytest.mark.parametrize("index", range(25))
def test_flipped_byte_fails_checksum(index):
    """Test that altering any single byte of an encoded address is rejected."""
    raw = bytearray(base58.b58decode(USDT_CONTRACT_TEXT))
    raw[index] ^= 0x01
    tampered = base58.b58encode(bytes(raw)).decode("ascii")

    with pytest.raises(ChecksumMismatch):
        decode_address(tampered)


def test_flipped_last_character_fails_checksum():
    last = USDT_CONTRACT_TEXT[-1]
    replacement = "u" if last != "u" else "v"
    with pytest.raises(ChecksumMismatch):
        decode_address(USDT_CONTRACT_TEXT[:-1] + replacement)


@pytest.mark.parametrize("bad_char", ["0", "O", "I", "l", "+", " ", "é"])
def test_invalid_characters_rejected(bad_char):
    """Test characters outside the base-58 alphabet raise InvalidEncoding."""
    assert bad_char not in BASE58_ALPHABET
    with pytest.raises(InvalidEncoding):
        decode_address(USDT_CONTRACT_TEXT[:5] + bad_char + USDT_CONTRACT_TEXT[6:])


def test_too_short_rejected():
    with pytest.raises(InvalidEncoding):
        decode_address("1111")
    with pytest.raises(InvalidEncoding):
        decode_address("")


def test_leading_zero_bytes_preserved():
    """Test leading zero bytes survive as leading '1' symbols."""
    codec = AddressCodec(version_byte=0x00, text_prefix="1")
    binary = bytes(21)

    text = codec.to_text_form(binary)

    assert text.startswith("1" * 21)
    assert codec.to_binary_form(text) == binary


def test_leading_zero_symbols_decode_to_zero_bytes():
    payload = bytes(3) + b"\x41abc"
    text = base58.b58encode(payload + checksum(payload)).decode("ascii")

    assert text.startswith("111")
    assert decode_address(text) == payload


@pytest.mark.parametrize(
    "binary",
    [
        bytes.fromhex(SENDER_HEX)[:-1],
        bytes.fromhex(SENDER_HEX) + b"\x00",
        bytes.fromhex("42" + "11" * 20),
        b"",
    ],
)
def test_malformed_binary_rejected(binary):
    with pytest.raises(MalformedAddress):
        encode_address(binary)


def test_is_text_address():
    valid = encode_address(bytes.fromhex(RECIPIENT_HEX))

    assert is_text_address(valid)
    assert not is_text_address(valid.lower())
    assert not is_text_address(valid[:-1])
    assert not is_text_address("X" + valid[1:])
    assert not is_text_address(RECIPIENT_HEX)
    assert not is_text_address(None)
    assert not is_text_address(12345)


def test_is_text_address_rejects_other_version():
    """Test a checksummed value carrying another network's version byte."""
    codec = AddressCodec(version_byte=0xA0)
    foreign = codec.to_text_form(bytes.fromhex("a0" + "11" * 20))
    assert not is_text_address(foreign)


def test_is_hex_address():
    assert is_hex_address(RECIPIENT_HEX)
    assert is_hex_address("0x" + RECIPIENT_HEX)
    assert is_hex_address(USDT_CONTRACT_HEX.upper())
    assert not is_hex_address(RECIPIENT_HEX[:-2])
    assert not is_hex_address(RECIPIENT_HEX + "00")
    assert not is_hex_address("42" + RECIPIENT_HEX[2:])
    assert not is_hex_address("41" + "zz" * 20)
    assert not is_hex_address(encode_address(bytes.fromhex(RECIPIENT_HEX)))
    assert not is_hex_address(None)


def test_hex_and_text_conversions():
    text = default_codec.hex_to_text("0x" + USDT_CONTRACT_HEX)
    assert text == USDT_CONTRACT_TEXT
    assert default_codec.text_to_hex(text) == USDT_CONTRACT_HEX

    with pytest.raises(MalformedAddress):
        default_codec.hex_to_text("41xyz")


def test_normalize():
    text = encode_address(bytes.fromhex(SENDER_HEX))

    assert default_codec.normalize(SENDER_HEX) == text
    assert default_codec.normalize(text) == text
    assert default_codec.normalize("not-an-address") is None


def test_codec_from_settings():
    """Test a codec for another network is built from settings."""
    settings = Settings(
        ADDRESS_VERSION_BYTE=0xA0, TEXT_ADDRESS_PREFIX="Z", TEXT_ADDRESS_LENGTH=34
    )
    codec = AddressCodec.from_settings(settings)

    assert codec.hex_prefix == "a0"
    assert codec.is_valid_hex_form("a0" + "11" * 20)
    assert not codec.is_valid_hex_form(SENDER_HEX)
    assert ADDRESS_HEX_PREFIX == "41"


@pytest.mark.parametrize("version_byte", [-1, 0x100, 0x4141])
def test_settings_reject_out_of_range_version_byte(version_byte):
    with pytest.raises(ValidationError):
        Settings(ADDRESS_VERSION_BYTE=version_byte)
