import logging
import threading

from django.utils import timezone

from .exceptions import RefreshInProgress, UpstreamUnavailable
from .reconcile import reconcile
from .repository import CountryRepository
from .sources import fetch_all
from .utils.image import generate_summary_image

logger = logging.getLogger(__name__)

SUMMARY_TOP_N = 5

# one refresh at a time per process; a second caller is turned away
_refresh_lock = threading.Lock()


def render_summary(repository, render=generate_summary_image):
    total, last_refreshed_at = repository.count_and_last_refresh()
    top = repository.top_by_gdp(SUMMARY_TOP_N)
    timestamp = last_refreshed_at.isoformat() if last_refreshed_at else 'never'
    return render(total, top, timestamp)


def do_refresh(repository=None, rng=None, fetch=fetch_all, render=generate_summary_image):
    """
    Fetch both upstream sources, reconcile them and upsert the result.

    Raises ``RefreshInProgress`` when another refresh holds the lock and
    ``UpstreamUnavailable`` when either source failed; in both cases storage
    is untouched. The summary image is rendered after the commit.
    """
    if not _refresh_lock.acquire(blocking=False):
        raise RefreshInProgress()
    try:
        return _refresh(repository or CountryRepository(), rng, fetch, render)
    finally:
        _refresh_lock.release()


def _refresh(repository, rng, fetch, render):
    logger.info("Refreshing countries and exchange rates")
    countries_data, rates, failures = fetch()
    if failures:
        raise UpstreamUnavailable(failures)

    now = timezone.now()
    records = reconcile(countries_data, rates, rng=rng, refreshed_at=now)
    written = repository.upsert_batch(records, now)
    logger.info("Upserted %d countries", written)

    total, _ = repository.count_and_last_refresh()
    result = {
        'message': 'Countries refreshed successfully',
        'timestamp': now.isoformat(),
        'total_countries': total,
        'image_generated': True,
    }

    # data is already committed; a broken image must not turn this into an error
    try:
        render_summary(repository, render=render)
    except Exception:
        logger.exception("Refresh succeeded but the summary image could not be generated")
        result['message'] = 'Countries refreshed successfully but failed to generate summary image'
        result['image_generated'] = False

    return result
