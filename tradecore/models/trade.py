"""Pydantic models for the trade API request/response bodies."""

from pydantic import BaseModel, ConfigDict, Field

from tradecore.models.types import DecimalString


class AmountBody(BaseModel):
    """Payload of a quote or trade request."""

    amount: DecimalString = Field(description="Instrument A amount, e.g. '10'")


class TradeRequest(BaseModel):
    """A quote preview or settlement request.

    The same body is used by both paths and is forwarded unchanged to the
    ledger on settlement.
    """

    send_body: AmountBody = Field(alias="sendBody")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def for_amount(cls, amount: str) -> "TradeRequest":
        return cls(send_body=AmountBody(amount=amount))


class QuotePreview(BaseModel):
    """Read-only quote, both amounts printed with 4 fractional digits."""

    amount_csd: str = Field(alias="amountCsd", description="Instrument A amount")
    amount_hbs: str = Field(alias="amountHbs", description="Instrument B amount")

    model_config = ConfigDict(populate_by_name=True)


class SettlementResult(BaseModel):
    """Outcome reported by the ledger for a settlement.

    Ledgers may attach extra fields; they are relayed unchanged.
    """

    status: str = Field(description="'ok' on success, 'fail' on a soft failure")
    trade_id: int | None = Field(default=None, alias="tradeId")

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @property
    def is_success(self) -> bool:
        return self.status != "fail"

    @classmethod
    def fail(cls) -> "SettlementResult":
        """Soft failure returned for amounts below the minimum."""
        return cls(status="fail")


class AddressBody(BaseModel):
    """Payload of a token issuance request."""

    address: str = ""


class EthAuthorizeRequest(BaseModel):
    """Request a bearer token for a wallet address."""

    send_body: AddressBody = Field(alias="sendBody")

    model_config = ConfigDict(populate_by_name=True)


class EthAuthorizeReply(BaseModel):
    """Issued bearer token."""

    token: str
