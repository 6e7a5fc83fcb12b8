from decimal import Decimal
from typing import Optional

from services.google_play_service import Price
from utils.constants import MICROS_PER_UNIT, NANOS_DIGITS, NOT_AVAILABLE


def format_price(price: Optional[Price]) -> str:
    if price is None:
        return NOT_AVAILABLE

    if price.units is not None and price.nanos is not None:
        if not 0 <= price.nanos < 10 ** NANOS_DIGITS:
            return NOT_AVAILABLE

        formatted = f"{price.units}.{price.nanos:0{NANOS_DIGITS}d}"
        return formatted.rstrip("0").rstrip(".")

    if price.price_micros is not None:
        return str(Decimal(price.price_micros) / Decimal(MICROS_PER_UNIT))

    return NOT_AVAILABLE
