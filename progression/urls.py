# progression/urls.py
from django.urls import path, include
from rest_framework.routers import SimpleRouter
from progression.views import ProgressionViewSet

router = SimpleRouter()
router.register(r'', ProgressionViewSet, basename='progression')

urlpatterns = [
    path('', include(router.urls)),
]

app_name = 'progression'
