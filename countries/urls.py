from django.urls import path
from . import views

app_name = 'countries'

urlpatterns = [
    path('countries/refresh', views.RefreshCountriesView.as_view(), name='refresh'),
    path('countries', views.CountriesListView.as_view(), name='list'),
    # must precede the <name> route
    path('countries/image', views.CountryImageView.as_view(), name='image'),
    path('countries/<str:name>', views.CountryDetailView.as_view(), name='detail'),
    path('status', views.StatusView.as_view(), name='status'),
]
