from django.contrib import admin
from .models import Country, RefreshMarker


@admin.register(Country)
class CountryAdmin(admin.ModelAdmin):
    list_display = ('name', 'region', 'currency_code', 'population', 'exchange_rate', 'estimated_gdp', 'last_refreshed_at')
    list_filter = ('region',)
    search_fields = ('name', 'currency_code')
    readonly_fields = ('exchange_rate', 'estimated_gdp', 'last_refreshed_at')


@admin.register(RefreshMarker)
class RefreshMarkerAdmin(admin.ModelAdmin):
    list_display = ('last_refreshed_at',)

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
