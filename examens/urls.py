# examens/urls.py
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import SerieViewSet, parametres_examen, verrou

router = DefaultRouter()
router.register('series', SerieViewSet, basename='serie')

urlpatterns = [
    path('', include(router.urls)),
    path('parametres-examen/', parametres_examen, name='parametres-examen'),
    path('parametres-examen/verrou/', verrou, name='verrou-solutions'),
]
