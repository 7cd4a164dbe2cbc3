import os

from django.http import FileResponse
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .exceptions import CountryNotFound
from .refresh import do_refresh
from .repository import CountryRepository
from .serializers import CountryQuerySerializer, CountrySerializer
from .utils.image import get_summary_image_path


class CountryRepositoryMixin:
    repository_class = CountryRepository

    def get_repository(self):
        return self.repository_class()


class RefreshCountriesView(CountryRepositoryMixin, APIView):
    """
    POST /countries/refresh
    Fetch countries + exchange rates, then upsert into DB and generate summary image.
    """

    def post(self, request):
        result = do_refresh(repository=self.get_repository())
        return Response(result, status=status.HTTP_200_OK)


class CountriesListView(CountryRepositoryMixin, APIView):
    """
    GET /countries  -> supports ?region= & ?currency= & ?sort=gdp_desc
    """

    def get(self, request):
        params = CountryQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)

        countries = self.get_repository().query_filtered(
            region=params.validated_data.get('region'),
            currency=params.validated_data.get('currency'),
            sort_by_gdp_desc=params.validated_data.get('sort') == 'gdp_desc',
        )
        serializer = CountrySerializer(countries, many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)


class CountryDetailView(CountryRepositoryMixin, APIView):
    """
    GET /countries/<name>
    DELETE /countries/<name>
    """

    def get(self, request, name):
        country = self.get_repository().get_by_name(name)
        if country is None:
            raise CountryNotFound()
        return Response(CountrySerializer(country).data, status=status.HTTP_200_OK)

    def delete(self, request, name):
        if not self.get_repository().delete_by_name(name):
            raise CountryNotFound()
        return Response({"message": f"{name} deleted successfully"}, status=status.HTTP_200_OK)


class StatusView(CountryRepositoryMixin, APIView):
    """
    GET /status
    """

    def get(self, request):
        total, last_refreshed_at = self.get_repository().count_and_last_refresh()
        return Response({
            "total_countries": total,
            "last_refreshed_at": last_refreshed_at.isoformat() if last_refreshed_at else None,
        }, status=status.HTTP_200_OK)


class CountryImageView(APIView):
    """
    GET /countries/image
    """

    def get(self, request):
        path = get_summary_image_path()
        if not os.path.exists(path):
            return Response({"error": "Summary image not found"}, status=status.HTTP_404_NOT_FOUND)
        return FileResponse(open(path, 'rb'), content_type='image/png')
