import logging
from concurrent.futures import ThreadPoolExecutor

import requests
from django.conf import settings

logger = logging.getLogger(__name__)

COUNTRIES_SOURCE = 'Countries API'
EXCHANGE_SOURCE = 'Exchange rates API'


class SourceError(Exception):
    """The upstream answered, but not with the payload shape we expect."""


def fetch_countries(timeout=None):
    resp = requests.get(settings.EXTERNAL_COUNTRIES_API, timeout=timeout or settings.EXTERNAL_API_TIMEOUT)
    resp.raise_for_status()
    data = resp.json()
    if not isinstance(data, list):
        raise SourceError('countries payload is not a list')
    return data


def fetch_exchange_rates(timeout=None):
    resp = requests.get(settings.EXTERNAL_EXCHANGE_API, timeout=timeout or settings.EXTERNAL_API_TIMEOUT)
    resp.raise_for_status()
    data = resp.json()
    # API returns 'rates' mapping
    rates = data.get('rates') if isinstance(data, dict) else None
    if not isinstance(rates, dict):
        raise SourceError('exchange payload has no rates mapping')
    return rates


def fetch_all(timeout=None):
    """
    Fetch the country directory and the USD exchange rates concurrently.

    Returns ``(countries, rates, failures)`` where ``failures`` lists the
    label of every source that could not be fetched. A failed source's
    payload is ``None``. Each source is tried exactly once.
    """
    jobs = {
        COUNTRIES_SOURCE: fetch_countries,
        EXCHANGE_SOURCE: fetch_exchange_rates,
    }
    results, failures = {}, []

    with ThreadPoolExecutor(max_workers=len(jobs)) as executor:
        futures = {label: executor.submit(fn, timeout) for label, fn in jobs.items()}
        for label, future in futures.items():
            try:
                results[label] = future.result()
            except (requests.RequestException, ValueError, SourceError) as exc:
                logger.warning("Could not fetch data from %s: %s", label, exc)
                results[label] = None
                failures.append(label)

    return results[COUNTRIES_SOURCE], results[EXCHANGE_SOURCE], failures
