from services.google_play_service import Price
from utils.pricing import format_price


def test_whole_units_drop_the_decimal_point():
    assert format_price(Price(units=5, nanos=0)) == "5"


def test_trailing_zeros_are_stripped():
    assert format_price(Price(units=5, nanos=500000000)) == "5.5"


def test_nanos_are_zero_padded():
    assert format_price(Price(units=0, nanos=990000)) == "0.00099"


def test_legacy_micros():
    assert format_price(Price(price_micros=2990000)) == "2.99"


def test_missing_price_is_not_available():
    assert format_price(None) == "N/A"
    assert format_price(Price()) == "N/A"


def test_out_of_range_nanos_is_not_available():
    assert format_price(Price(units=1, nanos=1_000_000_000)) == "N/A"


def test_money_payload_defaults_omitted_fields():
    price = Price.from_money({"currencyCode": "BRL", "units": "19"})

    assert price == Price(units=19, nanos=0, currency_code="BRL")
    assert format_price(price) == "19"


def test_legacy_payload_mapping():
    price = Price.from_money({"priceMicros": "2990000", "currency": "USD"})

    assert format_price(price) == "2.99"
    assert price.currency_code == "USD"


def test_empty_payload_maps_to_no_price():
    assert Price.from_money({}) is None
    assert format_price(Price.from_money({"currencyCode": "USD"})) == "N/A"
