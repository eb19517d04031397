from django.urls import path, include
from rest_framework.routers import DefaultRouter

from apps.money.api.v1.views import ConversionViewSet

router = DefaultRouter()
router.register(r'rates', ConversionViewSet, basename='money-rate')

urlpatterns = [
    path('', include(router.urls)),
]
