# ia/urls.py
from django.urls import path
from .views import description_chapitre, description_serie

urlpatterns = [
    path('description-chapitre/', description_chapitre, name='ia-description-chapitre'),
    path('description-serie/', description_serie, name='ia-description-serie'),
]
