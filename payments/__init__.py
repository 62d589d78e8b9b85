"""
Payment verification package.
Exposes the address codec, amount converter and transaction verifier entry points.
"""

from .amounts import to_decimal, to_smallest_unit
from .calldata import CallDataDecoder, DecodedTransfer, decode_transfer_call
from .errors import (
    ChecksumMismatch,
    InvalidEncoding,
    MalformedAddress,
    MalformedAmount,
    MalformedCallData,
    MalformedTransaction,
    PaymentVerificationError,
    UnsupportedCallSignature,
)
from .models import (
    ExpectedPayment,
    Reason,
    ReasonCode,
    TokenKind,
    VerificationDetails,
    VerificationVerdict,
)
from .records import (
    NativeTransfer,
    TokenCall,
    TransactionRecord,
    UnsupportedContract,
    parse_transaction,
)
from .tokens import TokenRegistry, build_expected_payment, format_amount
from .tron_address import (
    AddressCodec,
    decode_address,
    encode_address,
    is_hex_address,
    is_text_address,
)
from .verifier import TransactionVerifier, verify

__all__ = [
    "AddressCodec",
    "CallDataDecoder",
    "ChecksumMismatch",
    "DecodedTransfer",
    "ExpectedPayment",
    "InvalidEncoding",
    "MalformedAddress",
    "MalformedAmount",
    "MalformedCallData",
    "MalformedTransaction",
    "NativeTransfer",
    "PaymentVerificationError",
    "Reason",
    "ReasonCode",
    "TokenCall",
    "TokenKind",
    "TokenRegistry",
    "TransactionRecord",
    "TransactionVerifier",
    "UnsupportedCallSignature",
    "UnsupportedContract",
    "VerificationDetails",
    "VerificationVerdict",
    "build_expected_payment",
    "decode_address",
    "decode_transfer_call",
    "encode_address",
    "format_amount",
    "is_hex_address",
    "is_text_address",
    "parse_transaction",
    "to_decimal",
    "to_smallest_unit",
    "verify",
]
