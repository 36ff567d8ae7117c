"""Currency conversion and formatting.

All amounts inside the engine are GBP. Conversion happens only at
formatting time, from a fixed rate table - nothing converted is stored.
"""

import logging
from dataclasses import dataclass
from typing import Dict

from cyberrisk.util.numbers import round_half_up

logger = logging.getLogger(__name__)

BASE_CURRENCY = 'gbp'


@dataclass(frozen=True)
class Currency:
    code: str
    symbol: str
    rate: float  # units per 1 GBP


CURRENCIES: Dict[str, Currency] = {
    'gbp': Currency('gbp', '£', 1.0),
    'usd': Currency('usd', '$', 1.27),
    'eur': Currency('eur', '€', 1.17),
    'cad': Currency('cad', 'C$', 1.72),
    'aud': Currency('aud', 'A$', 1.93),
}


def get_currency(code: str) -> Currency:
    """Look up a currency, falling back to GBP for unknown codes."""
    currency = CURRENCIES.get((code or '').lower())
    if currency is None:
        logger.warning(f"Unknown currency '{code}', formatting in {BASE_CURRENCY}")
        return CURRENCIES[BASE_CURRENCY]
    return currency


def format_currency(amount: float, code: str = BASE_CURRENCY) -> str:
    """Format a GBP amount in the target currency, e.g. 1000 usd -> '$1,270'."""
    currency = get_currency(code)
    converted = round_half_up(amount * currency.rate)
    sign = '-' if converted < 0 else ''
    return f"{sign}{currency.symbol}{abs(converted):,}"


def format_range(low: float, high: float, code: str = BASE_CURRENCY, suffix: str = '') -> str:
    """Format a price band like '£2,000 - £4,000/month'."""
    return f"{format_currency(low, code)} - {format_currency(high, code)}{suffix}"
