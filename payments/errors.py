"""
Payment Verification Errors

Typed failures raised by the address codec, amount converter, call-data
decoder and transaction parser. The verifier catches every one of them and
turns it into a verdict reason, so none of these should reach a caller of
``verify``.
"""


class PaymentVerificationError(ValueError):
    """Base class for all data errors raised by the verification core."""


class MalformedAddress(PaymentVerificationError):
    pass


class InvalidEncoding(PaymentVerificationError):
    pass


class ChecksumMismatch(PaymentVerificationError):
    pass


class MalformedAmount(PaymentVerificationError):
    pass


class UnsupportedCallSignature(PaymentVerificationError):
    pass


class MalformedCallData(PaymentVerificationError):
    pass


class MalformedTransaction(PaymentVerificationError):
    pass
