from unittest import mock

import requests
from django.conf import settings

COUNTRIES = [
    {
        "name": "Nigeria",
        "capital": "Abuja",
        "region": "Africa",
        "population": 206139587,
        "flag": "https://flagcdn.com/ng.svg",
        "currencies": [{"code": "NGN", "name": "Nigerian naira", "symbol": "₦"}],
    },
    {
        "name": "Ghana",
        "capital": "Accra",
        "region": "Africa",
        "population": 31072945,
        "flag": "https://flagcdn.com/gh.svg",
        "currencies": [{"code": "GHS", "name": "Ghanaian cedi", "symbol": "₵"}],
    },
    {
        "name": "Germany",
        "capital": "Berlin",
        "region": "Europe",
        "population": 83240525,
        "flag": "https://flagcdn.com/de.svg",
        "currencies": [{"code": "EUR", "name": "Euro", "symbol": "€"}],
    },
    {
        "name": "Testland",
        "population": 1000,
        "currencies": [{"code": "TST"}],
    },
    {
        "name": "Antarctica",
        "region": "Polar",
        "population": 1000,
    },
    {
        "name": "Unquotia",
        "capital": "",
        "region": "Oceania",
        "currencies": [{"code": "XYZ"}],
    },
]

RATES = {"NGN": 1600.0, "GHS": 15.5, "EUR": 0.92, "TST": 2, "USD": 1}


class FakeResponse:
    def __init__(self, url, payload=None, status_code=200, content=b''):
        self.url = url
        self.status_code = status_code
        self._payload = payload
        self.content = content

    def json(self):
        if self._payload is None:
            raise ValueError('No JSON object could be decoded')
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f'{self.status_code} Error for url: {self.url}', response=self)


class Upstream:
    """Stands in for requests.get, answering for both data sources and flag URLs."""

    def __init__(self, countries=None, rates=None):
        self.countries = COUNTRIES if countries is None else countries
        self.rates = RATES if rates is None else rates
        self.failing = set()
        self.calls = []

    def fail(self, *urls):
        self.failing.update(urls)

    def get(self, url, timeout=None, **kwargs):
        self.calls.append((url, timeout))
        if url in self.failing:
            raise requests.ConnectionError(f'could not reach {url}')
        if url == settings.EXTERNAL_COUNTRIES_API:
            return FakeResponse(url, self.countries)
        if url == settings.EXTERNAL_EXCHANGE_API:
            return FakeResponse(url, {"result": "success", "base_code": "USD", "rates": self.rates})
        # flags are SVG upstream, which Pillow cannot decode
        return FakeResponse(url, content=b'<svg xmlns="http://www.w3.org/2000/svg"></svg>')

    def patch(self):
        return mock.patch('requests.get', side_effect=self.get)
