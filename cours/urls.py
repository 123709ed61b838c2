# cours/urls.py
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from cours.views import CoursViewSet, ChapitreViewSet

router = DefaultRouter()
router.register(r'cours', CoursViewSet, basename='cours')
router.register(r'chapitres', ChapitreViewSet, basename='chapitre')

urlpatterns = [
    path('', include(router.urls)),
]
