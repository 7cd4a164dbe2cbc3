from django.db import models
from django.utils import timezone


class Country(models.Model):
    # unique constraint is case-sensitive; API lookups use iexact
    name = models.CharField(max_length=200, unique=True)
    capital = models.CharField(max_length=200, null=True, blank=True)
    region = models.CharField(max_length=100, null=True, blank=True)
    population = models.BigIntegerField(default=0)
    currency_code = models.CharField(max_length=10, null=True, blank=True)
    # units of local currency per USD; null when the currency is not quoted
    exchange_rate = models.FloatField(null=True, blank=True)
    estimated_gdp = models.FloatField(default=0)
    flag_url = models.URLField(max_length=500, null=True, blank=True)
    last_refreshed_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'countries'
        verbose_name_plural = 'countries'

    def __str__(self):
        return self.name


class RefreshMarker(models.Model):
    """Singleton row (pk=1) recording when the dataset was last refreshed."""

    SINGLETON_ID = 1

    last_refreshed_at = models.DateTimeField()

    class Meta:
        db_table = 'refresh_marker'

    def __str__(self):
        return f"Last refresh at {self.last_refreshed_at.isoformat()}"
