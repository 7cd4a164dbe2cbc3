from io import StringIO

import pytest
from django.core.management import CommandError, call_command

from countries.models import Country
from tests.utils import COUNTRIES

pytestmark = pytest.mark.django_db


def test_refresh_command(upstream):
    out = StringIO()

    call_command("refresh_countries", stdout=out)

    assert "Countries refreshed successfully" in out.getvalue()
    assert Country.objects.count() == len(COUNTRIES)


def test_refresh_command_upstream_down(upstream, settings):
    upstream.fail(settings.EXTERNAL_COUNTRIES_API)

    with pytest.raises(CommandError, match="Countries API"):
        call_command("refresh_countries")

    assert Country.objects.count() == 0
