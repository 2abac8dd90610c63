"""
Pre-trade cash check.

Previews how a proposed trade moves the balance of its settlement currency
and rejects BUY/COVER trades that would overdraw it. A rejection is an
ordinary outcome here, so it comes back as an ``Err`` result rather than an
exception.
"""

import logging
from decimal import Decimal
from typing import Mapping, Optional

from config.constants import ERROR_INSUFFICIENT_CASH
from config.settings import NumericConfig
from data.models.enums import TradeSide
from data.models.results import CashImpactPreview, Result, err, ok
from data.models.trade import TradeForCash
from .calculations import NumericInput, numeric_context, round_amount, to_decimal

logger = logging.getLogger(__name__)


def _balance_for(currency: str, current_balances: Mapping[str, NumericInput]) -> Decimal:
    """Balance of ``currency``; keys are matched case-insensitively, missing counts as zero."""
    for key, value in current_balances.items():
        if key.upper() == currency:
            return to_decimal(value)
    return Decimal('0')


def preview_cash_impact(trade: TradeForCash,
                        current_balances: Mapping[str, NumericInput],
                        config: Optional[NumericConfig] = None) -> CashImpactPreview:
    """
    Preview the cash impact of a trade before submission.

    BUY and COVER pay ``gross + costs``; SELL and SHORT receive
    ``gross - costs``. The movement is rounded to 2 places.

    Args:
        trade: Proposed trade
        current_balances: Cash per currency code

    Returns:
        CashImpactPreview with the projected balance and sufficiency flag
    """
    current_balance = _balance_for(trade.currency, current_balances)

    with numeric_context(config):
        if trade.side.consumes_cash:
            trade_amount = round_amount(-(trade.gross_amount + trade.costs), config)
        else:
            trade_amount = round_amount(trade.gross_amount - trade.costs, config)

        projected_balance = current_balance + trade_amount

    return CashImpactPreview(
        currency=trade.currency,
        current_balance=current_balance,
        trade_amount=trade_amount,
        projected_balance=projected_balance,
        sufficient=projected_balance >= 0,
    )


def validate_cash_sufficiency(trade: TradeForCash,
                              current_balances: Mapping[str, NumericInput],
                              config: Optional[NumericConfig] = None) -> Result[CashImpactPreview, str]:
    """
    Validate that there is enough cash to execute a BUY or COVER trade.

    SELL and SHORT always pass because they bring cash in.

    Returns:
        ``Ok(preview)`` when the trade can settle, otherwise ``Err(message)``
        naming the currency, the current balance and the amount required
    """
    preview = preview_cash_impact(trade, current_balances, config)

    if trade.side in (TradeSide.SELL, TradeSide.SHORT):
        return ok(preview)

    if not preview.sufficient:
        message = ERROR_INSUFFICIENT_CASH.format(
            currency=trade.currency,
            have=round_amount(preview.current_balance, config),
            need=round_amount(abs(preview.trade_amount), config),
        )
        logger.info(f"Cash check rejected {trade.side.value} trade: {message}")
        return err(message)

    return ok(preview)
