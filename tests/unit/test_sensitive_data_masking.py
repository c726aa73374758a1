import pytest

from config.settings import mask_sensitive_data

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("value", "secret"),
    [
        ("+91 98765 43210", "98765 43210"),
        ("call 91-98765-43210 before noon", "98765-43210"),
        ("password='s3cret123'", "s3cret123"),
        ("Authorization: eyJhbGciOi", "eyJhbGciOi"),
        ("token=abc123xyz", "abc123xyz"),
    ],
)
def test_sensitive_values_are_masked(value, secret):
    result = mask_sensitive_data(None, None, {"event": "x", "detail": value})

    assert secret not in result["detail"]
    assert "***MASKED***" in result["detail"]


def test_business_identifiers_pass_through():
    event_dict = {
        "event": "order.placed",
        "order_number": "ORD-20261019-A1B2C3",
        "total_amount": "1250.00",
        "farmer_id": 42,
    }

    assert mask_sensitive_data(None, None, dict(event_dict)) == event_dict
