import pytest
import requests
from unittest.mock import Mock

from apps.money.domain.exceptions import RateProviderError, RateProviderErrorKind
from apps.money.domain.models import ExchangeRate, parse_currency
from apps.money.infrastructure.providers.ecb import (
    ECBProvider,
    check_status_code,
    parse_quotes,
    read_rate_from_response,
)

ECB_FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<gesmes:Envelope xmlns:gesmes="http://www.gesmes.org/xml/2002-08-01" xmlns="http://www.ecb.int/vocabulary/2002-08-01/eurofxref">
    <gesmes:subject>Reference rates</gesmes:subject>
    <Cube>
        <Cube time="2023-10-27">
            <Cube currency="USD" rate="1.25"/>
            <Cube currency="JPY" rate="150.0"/>
            <Cube currency="RON" rate="5.0"/>
        </Cube>
    </Cube>
</gesmes:Envelope>"""


@pytest.fixture
def provider():
    return ECBProvider(rates_url="https://ecb.test/eurofxref-daily.xml", timeout=1)


@pytest.fixture
def mock_requests_get(mocker):
    return mocker.patch("requests.get")


def make_response(status_code=200, content=ECB_FEED):
    response = Mock()
    response.status_code = status_code
    response.content = content
    return response


def test_fetch_exchange_rate_success(provider, mock_requests_get):
    """
    Test that fetch_exchange_rate derives the cross rate from the feed:
    USD to RON = 5.0 / 1.25 = 4.
    """
    mock_requests_get.return_value = make_response()

    rate = provider.fetch_exchange_rate(parse_currency("USD"), parse_currency("RON"))

    assert rate == ExchangeRate(4, 0)
    mock_requests_get.assert_called_once_with("https://ecb.test/eurofxref-daily.xml", timeout=1)


def test_fetch_exchange_rate_uses_settings(settings, mock_requests_get):
    """
    Test that URL and timeout default to the Django settings.
    """
    settings.ECB_RATES_URL = "https://ecb.test/from-settings.xml"
    settings.ECB_TIMEOUT_SECONDS = 3
    mock_requests_get.return_value = make_response()

    ECBProvider().fetch_exchange_rate(parse_currency("EUR"), parse_currency("USD"))

    mock_requests_get.assert_called_once_with("https://ecb.test/from-settings.xml", timeout=3)


def test_fetch_exchange_rate_timeout(provider, mock_requests_get):
    """
    Test that a timeout is reported as TIMEOUT.
    """
    mock_requests_get.side_effect = requests.exceptions.Timeout("read timed out")

    with pytest.raises(RateProviderError) as exc_info:
        provider.fetch_exchange_rate(parse_currency("USD"), parse_currency("RON"))

    assert exc_info.value.kind == RateProviderErrorKind.TIMEOUT


def test_fetch_exchange_rate_connection_error(provider, mock_requests_get):
    """
    Test that other network failures are reported as CALLING_SERVER.
    """
    mock_requests_get.side_effect = requests.exceptions.ConnectionError("connection refused")

    with pytest.raises(RateProviderError) as exc_info:
        provider.fetch_exchange_rate(parse_currency("USD"), parse_currency("RON"))

    assert exc_info.value.kind == RateProviderErrorKind.CALLING_SERVER


@pytest.mark.parametrize(
    "status_code, kind",
    [
        (404, RateProviderErrorKind.CLIENT_SIDE),
        (500, RateProviderErrorKind.SERVER_SIDE),
        (503, RateProviderErrorKind.SERVER_SIDE),
        (302, RateProviderErrorKind.UNKNOWN_STATUS_CODE),
    ],
)
def test_fetch_exchange_rate_bad_status(provider, mock_requests_get, status_code, kind):
    """
    Test that non-200 responses are classified by status code.
    """
    mock_requests_get.return_value = make_response(status_code=status_code, content=b"")

    with pytest.raises(RateProviderError) as exc_info:
        provider.fetch_exchange_rate(parse_currency("USD"), parse_currency("RON"))

    assert exc_info.value.kind == kind
    assert str(status_code) in str(exc_info.value)


def test_check_status_code_ok():
    check_status_code(200)


class TestReadRateFromResponse:
    """Tests for XML parsing and rate calculation."""

    def test_eur_to_usd(self):
        assert read_rate_from_response("EUR", "USD", ECB_FEED) == ExchangeRate(125, 2)

    def test_usd_to_eur(self):
        """1 / 1.25 = 0.8"""
        assert read_rate_from_response("USD", "EUR", ECB_FEED) == ExchangeRate(8, 1)

    def test_same_currency(self):
        assert read_rate_from_response("USD", "USD", b"not even xml") == ExchangeRate(1, 0)

    def test_non_terminating_cross_rate_is_truncated(self):
        """RON to USD = 1.25 / 5.0 = 0.25; JPY to RON = 5 / 150 = 0.0333..."""
        assert read_rate_from_response("RON", "USD", ECB_FEED) == ExchangeRate(25, 2)
        assert read_rate_from_response("JPY", "RON", ECB_FEED) == ExchangeRate(3333333, 8)

    def test_source_currency_not_found(self):
        with pytest.raises(RateProviderError) as exc_info:
            read_rate_from_response("XYZ", "USD", ECB_FEED)

        assert exc_info.value.kind == RateProviderErrorKind.RATE_NOT_FOUND

    def test_target_currency_not_found(self):
        with pytest.raises(RateProviderError) as exc_info:
            read_rate_from_response("USD", "XYZ", ECB_FEED)

        assert exc_info.value.kind == RateProviderErrorKind.RATE_NOT_FOUND

    def test_malformed_xml(self):
        with pytest.raises(RateProviderError) as exc_info:
            read_rate_from_response("USD", "EUR", b'<?xml version="1.0" encoding="UTF-8"?><MalformedXML>')

        assert exc_info.value.kind == RateProviderErrorKind.UNEXPECTED_FORMAT

    def test_feed_without_rates(self):
        with pytest.raises(RateProviderError) as exc_info:
            parse_quotes(b"<Envelope><Cube/></Envelope>")

        assert exc_info.value.kind == RateProviderErrorKind.UNEXPECTED_FORMAT

    def test_invalid_rate_attribute(self):
        with pytest.raises(RateProviderError) as exc_info:
            parse_quotes(b"<Envelope><Cube><Cube currency='USD' rate='abc'/></Cube></Envelope>")

        assert exc_info.value.kind == RateProviderErrorKind.UNEXPECTED_FORMAT

    def test_oversized_rate_attribute(self):
        content = b"<Envelope><Cube><Cube currency='USD' rate='" + b"9" * 5000 + b"'/></Cube></Envelope>"

        with pytest.raises(RateProviderError) as exc_info:
            parse_quotes(content)

        assert exc_info.value.kind == RateProviderErrorKind.UNEXPECTED_FORMAT
