import pytest
from rest_framework.test import APIClient

from utilisateurs.models import Utilisateur


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def etudiant(db):
    return Utilisateur.objects.create_user(
        email='etudiant@example.com', password='MotDePasse!42', nom_affichage='Awa Diop'
    )


@pytest.fixture
def admin(db):
    return Utilisateur.objects.create_user(
        email='admin@example.com', password='MotDePasse!42',
        nom_affichage='Admin', role=Utilisateur.ROLE_ADMIN
    )


@pytest.fixture
def client_etudiant(api_client, etudiant):
    api_client.force_authenticate(user=etudiant)
    return api_client


@pytest.fixture
def client_admin(admin):
    client = APIClient()
    client.force_authenticate(user=admin)
    return client
