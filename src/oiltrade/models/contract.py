"""Contract-wide ledger records."""

from __future__ import annotations

from pydantic import Field, StrictStr

from oiltrade._constants import DEFAULT_STATUS
from oiltrade.models._base import OilTradeModel


class ContractState(OilTradeModel):
    """Deployed contract version."""

    version: StrictStr
    status: bool = DEFAULT_STATUS


class TradeState(OilTradeModel):
    """The trade this contract instance tracks."""

    trade_id: StrictStr = Field(..., alias="tradeID")
