# analytics/urls.py
from django.urls import path, include
from rest_framework.routers import SimpleRouter
from .views import CollectionViewSet

router = SimpleRouter()
router.register('collections', CollectionViewSet, basename='collection')

urlpatterns = [
    path('', include(router.urls)),
]
