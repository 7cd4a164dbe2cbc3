import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

logger = logging.getLogger(__name__)


class UpstreamUnavailable(APIException):
    """One or both external data sources could not be fetched."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = 'External data source unavailable'
    default_code = 'upstream_unavailable'

    def __init__(self, failed_sources):
        self.failed_sources = list(failed_sources)
        super().__init__()

    @property
    def details(self):
        return f"Could not fetch data from {' and '.join(self.failed_sources)}"


class CountryNotFound(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Country not found'
    default_code = 'not_found'


class RefreshInProgress(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'A refresh is already in progress'
    default_code = 'refresh_in_progress'


def api_exception_handler(exc, context):
    """
    Render every API error as {"error": ..., "details"?: ...}.

    Anything DRF does not know how to handle (database errors included) is
    logged and answered with a bare 500 so no internals leak to the client.
    """
    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.exception("Unhandled error in %s", type(view).__name__ if view else 'view')
        set_rollback()
        return Response({'error': 'Internal server error'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, UpstreamUnavailable):
        logger.warning("Refresh aborted: %s", exc.details)
        response.data = {'error': str(exc.detail), 'details': exc.details}
    elif isinstance(response.data, dict) and 'detail' in response.data:
        response.data = {'error': str(response.data['detail'])}
    else:
        response.data = {'error': 'Validation failed', 'details': response.data}
    return response
