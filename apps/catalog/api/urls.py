from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import ProductViewSet, PCBuilderViewSet

router = DefaultRouter()
router.register(r'products', ProductViewSet, basename='product')
router.register(r'pc-builder', PCBuilderViewSet, basename='pc-builder')

urlpatterns = [
    path('', include(router.urls)),
]
