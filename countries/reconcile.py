import logging
import random

from django.utils import timezone

from .models import Country

logger = logging.getLogger(__name__)

MULTIPLIER_MIN = 1000
MULTIPLIER_MAX = 2000


def compute_estimated_gdp(population, exchange_rate, rng=None):
    # randomised on purpose: estimated_gdp is a synthetic figure
    multiplier = (rng or random).randint(MULTIPLIER_MIN, MULTIPLIER_MAX)
    return population * multiplier / exchange_rate


def first_currency_code(payload):
    currencies = payload.get('currencies') or []
    if isinstance(currencies, list) and currencies:
        first = currencies[0]
        if isinstance(first, dict):
            return first.get('code') or None
    return None


def lookup_rate(rates, currency_code):
    """Return a usable rate for ``currency_code`` or ``None``."""
    if not currency_code or currency_code not in rates:
        return None
    try:
        rate = float(rates[currency_code])
    except (TypeError, ValueError):
        return None
    return rate if rate > 0 else None


def reconcile(countries_data, rates, rng=None, refreshed_at=None):
    """
    Join country payloads with exchange rates into unsaved ``Country`` rows.

    Every payload that carries a name yields exactly one record. Countries
    without a currency, or whose currency is not quoted, get a null
    ``exchange_rate`` and an ``estimated_gdp`` of 0.
    """
    refreshed_at = refreshed_at or timezone.now()
    records = []

    for c in countries_data:
        name = c.get('name')
        if not name:
            logger.warning("Skipping country payload without a name: %r", c)
            continue

        population = int(c.get('population') or 0)
        currency_code = first_currency_code(c)
        exchange_rate = lookup_rate(rates, currency_code)

        if exchange_rate is None:
            estimated_gdp = 0
        else:
            estimated_gdp = compute_estimated_gdp(population, exchange_rate, rng)

        records.append(Country(
            name=name,
            capital=c.get('capital') or None,
            region=c.get('region') or None,
            population=population,
            currency_code=currency_code,
            exchange_rate=exchange_rate,
            estimated_gdp=estimated_gdp,
            flag_url=c.get('flag') or None,
            last_refreshed_at=refreshed_at,
        ))

    return records
