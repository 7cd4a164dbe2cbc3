import pytest

from countries.sources import COUNTRIES_SOURCE, EXCHANGE_SOURCE, fetch_all, fetch_exchange_rates, SourceError
from tests.utils import COUNTRIES, RATES, FakeResponse, Upstream


def test_fetch_all_returns_both_payloads(upstream, settings):
    countries, rates, failures = fetch_all()

    assert countries == COUNTRIES
    assert rates == RATES
    assert failures == []
    assert sorted(upstream.calls) == sorted([
        (settings.EXTERNAL_COUNTRIES_API, settings.EXTERNAL_API_TIMEOUT),
        (settings.EXTERNAL_EXCHANGE_API, settings.EXTERNAL_API_TIMEOUT),
    ])


def test_countries_failure_is_reported_alone(upstream, settings):
    upstream.fail(settings.EXTERNAL_COUNTRIES_API)

    countries, rates, failures = fetch_all()

    assert countries is None
    assert rates == RATES
    assert failures == [COUNTRIES_SOURCE]


def test_both_failures_are_reported(upstream, settings):
    upstream.fail(settings.EXTERNAL_COUNTRIES_API, settings.EXTERNAL_EXCHANGE_API)

    countries, rates, failures = fetch_all()

    assert countries is None and rates is None
    assert failures == [COUNTRIES_SOURCE, EXCHANGE_SOURCE]


def test_http_error_status_is_a_failure(settings):
    upstream = Upstream()
    fallback = upstream.get

    def get(url, timeout=None, **kwargs):
        if url == settings.EXTERNAL_EXCHANGE_API:
            return FakeResponse(url, {"error": "down"}, status_code=502)
        return fallback(url, timeout)

    upstream.get = get
    with upstream.patch():
        _, rates, failures = fetch_all()

    assert rates is None
    assert failures == [EXCHANGE_SOURCE]


def test_undecodable_body_is_a_failure(settings):
    upstream = Upstream()

    def get(url, timeout=None, **kwargs):
        if url == settings.EXTERNAL_COUNTRIES_API:
            return FakeResponse(url, None)
        return Upstream().get(url, timeout)

    upstream.get = get
    with upstream.patch():
        _, _, failures = fetch_all()

    assert failures == [COUNTRIES_SOURCE]


def test_rates_payload_without_mapping_is_rejected(settings):
    upstream = Upstream()

    def get(url, timeout=None, **kwargs):
        return FakeResponse(url, {"result": "error", "error-type": "unsupported-code"})

    upstream.get = get
    with upstream.patch():
        with pytest.raises(SourceError):
            fetch_exchange_rates()


def test_explicit_timeout_overrides_setting(upstream):
    fetch_all(timeout=1.5)

    assert {timeout for _, timeout in upstream.calls} == {1.5}
