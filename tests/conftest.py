import pytest
from rest_framework.test import APIClient

from countries.repository import CountryRepository
from tests.utils import Upstream


@pytest.fixture(autouse=True)
def summary_image_path(settings, tmp_path):
    settings.SUMMARY_IMAGE_PATH = str(tmp_path / 'cache' / 'summary.png')
    return settings.SUMMARY_IMAGE_PATH


@pytest.fixture(name="api_client")
def _api_client():
    return APIClient()


@pytest.fixture(name="repository")
def _repository():
    return CountryRepository()


@pytest.fixture(name="upstream")
def _upstream():
    upstream = Upstream()
    with upstream.patch():
        yield upstream
