from django.db import DEFAULT_DB_ALIAS, connections, transaction
from django.utils import timezone

from .models import Country, RefreshMarker

MUTABLE_FIELDS = [
    'capital', 'region', 'population', 'currency_code',
    'exchange_rate', 'estimated_gdp', 'flag_url', 'last_refreshed_at',
]


class CountryRepository:
    """
    Storage access for countries and the refresh marker.

    The database alias is passed in rather than picked up implicitly, so
    callers (and tests) decide which connection the gateway talks to.
    """

    def __init__(self, using=DEFAULT_DB_ALIAS, batch_size=100):
        self.using = using
        self.batch_size = batch_size

    @property
    def countries(self):
        return Country.objects.using(self.using)

    def upsert_batch(self, records, refreshed_at=None):
        """
        Insert or overwrite ``records`` by name and touch the refresh marker,
        all in one transaction. Nothing is written if any statement fails.
        """
        refreshed_at = refreshed_at or timezone.now()
        conflict_options = {'update_conflicts': True, 'update_fields': MUTABLE_FIELDS}
        # MySQL upserts via ON DUPLICATE KEY and rejects an explicit conflict target
        if connections[self.using].features.supports_update_conflicts_with_target:
            conflict_options['unique_fields'] = ['name']
        with transaction.atomic(using=self.using):
            self.countries.bulk_create(records, batch_size=self.batch_size, **conflict_options)
            self.touch_refresh_marker(refreshed_at)
        return len(records)

    def touch_refresh_marker(self, refreshed_at=None):
        marker, _ = RefreshMarker.objects.using(self.using).update_or_create(
            pk=RefreshMarker.SINGLETON_ID,
            defaults={'last_refreshed_at': refreshed_at or timezone.now()},
        )
        return marker

    def query_filtered(self, region=None, currency=None, sort_by_gdp_desc=False):
        qs = self.countries.all()
        if region:
            qs = qs.filter(region__iexact=region)
        if currency:
            qs = qs.filter(currency_code=currency)
        if sort_by_gdp_desc:
            qs = qs.order_by('-estimated_gdp')
        return list(qs)

    def get_by_name(self, name):
        return self.countries.filter(name__iexact=name).order_by('pk').first()

    def delete_by_name(self, name):
        """Delete one country matching ``name`` case-insensitively."""
        with transaction.atomic(using=self.using):
            country = self.countries.select_for_update().filter(name__iexact=name).order_by('pk').first()
            if country is None:
                return False
            country.delete(using=self.using)
        return True

    def count_and_last_refresh(self):
        total = self.countries.count()
        marker = RefreshMarker.objects.using(self.using).filter(pk=RefreshMarker.SINGLETON_ID).first()
        return total, marker.last_refreshed_at if marker else None

    def top_by_gdp(self, limit=5):
        return list(self.countries.order_by('-estimated_gdp')[:limit])
