"""
Token Registry

Known token contracts and their decimals for one ledger network. A registry is
built once (usually from Settings) and injected into the verifier; it is never
mutated afterwards, so registries for several networks can coexist.
"""

from collections.abc import Mapping
from types import MappingProxyType

from core.settings import Settings
from payments.amounts import to_decimal, to_smallest_unit
from payments.errors import MalformedAddress
from payments.models import (
    NATIVE_TOKEN,
    ExpectedPayment,
    TokenKind,
    VerificationDetails,
)
from payments.tron_address import AddressCodec, default_codec

DEFAULT_TOKEN_DECIMALS = 6


class TokenRegistry:
    """Immutable contract-address -> token-kind table plus token decimals."""

    def __init__(
        self,
        contracts: Mapping[str, TokenKind],
        decimals: Mapping[TokenKind, int] | None = None,
        codec: AddressCodec = default_codec,
        default_decimals: int = DEFAULT_TOKEN_DECIMALS,
    ):
        self.codec = codec
        self.default_decimals = default_decimals

        by_address = {}
        by_kind = {}
        for address, kind in contracts.items():
            normalized = codec.normalize(address)
            if normalized is None:
                raise MalformedAddress(f"invalid contract address for {kind}: {address}")
            by_address[normalized] = TokenKind(kind)
            by_kind[TokenKind(kind)] = address

        self._by_address = MappingProxyType(by_address)
        self._by_kind = MappingProxyType(by_kind)
        self._decimals = MappingProxyType(
            {TokenKind(kind): value for kind, value in (decimals or {}).items()}
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenRegistry":
        contracts = {}
        if settings.USDT_CONTRACT_ADDRESS:
            contracts[settings.USDT_CONTRACT_ADDRESS] = TokenKind.USDT
        if settings.USDC_CONTRACT_ADDRESS:
            contracts[settings.USDC_CONTRACT_ADDRESS] = TokenKind.USDC
        return cls(
            contracts,
            decimals=settings.TOKEN_DECIMALS,
            codec=AddressCodec.from_settings(settings),
        )

    def token_kind_for(self, contract_address: str) -> TokenKind:
        """Resolve a contract address in either form; unknown contracts are OTHER."""
        normalized = self.codec.normalize(contract_address)
        if normalized is None:
            return TokenKind.OTHER
        return self._by_address.get(normalized, TokenKind.OTHER)

    def contract_for(self, kind: TokenKind) -> str | None:
        if kind == NATIVE_TOKEN:
            return None
        return self._by_kind.get(TokenKind(kind))

    def decimals_for(self, kind: TokenKind) -> int:
        return self._decimals.get(TokenKind(kind), self.default_decimals)

    def __contains__(self, contract_address: str) -> bool:
        return self.token_kind_for(contract_address) != TokenKind.OTHER

    def __len__(self) -> int:
        return len(self._by_address)


def build_expected_payment(
    destination_address: str,
    amount: str,
    token_kind: TokenKind,
    registry: TokenRegistry,
    transaction_id: str | None = None,
) -> ExpectedPayment:
    """
    Build the criteria for a payment request from a human amount.

    Args:
        destination_address: Address that must receive the payment
        amount: Decimal amount, e.g. "12.5"
        token_kind: Asset the payment must be made in
        registry: Supplies the token's decimals and contract address
        transaction_id: Optional identifier the transaction must carry

    Raises:
        MalformedAmount: amount is not a valid decimal string
    """
    kind = TokenKind(token_kind)
    return ExpectedPayment(
        destination_address=destination_address,
        amount=to_smallest_unit(amount, registry.decimals_for(kind)),
        token_kind=kind,
        contract_address=registry.contract_for(kind),
        transaction_id=transaction_id,
    )


def format_amount(details: VerificationDetails, registry: TokenRegistry) -> str:
    """Human-readable amount of what was actually received."""
    return to_decimal(details.amount, registry.decimals_for(details.token_kind))
