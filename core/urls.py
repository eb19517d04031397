from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView

urlpatterns = [
    path('api/v1/money/', include('apps.money.api.v1.urls')),
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
]
