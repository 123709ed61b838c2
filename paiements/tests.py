# paiements/tests.py
from decimal import Decimal

import pytest

from paiements.models import Paiement

pytestmark = pytest.mark.django_db


@pytest.fixture
def paiement(etudiant):
    return Paiement.objects.create(
        utilisateur=etudiant, nom='Awa Diop', matricule='CS-2024-042', departement='Informatique',
        montant=Decimal('2450.00'), date_echeance='2024-10-15'
    )


class TestPaiements:
    def test_reserve_aux_admins(self, client_etudiant, paiement):
        assert client_etudiant.get('/api/paiements/').status_code == 403

    def test_filtre_par_statut(self, client_admin, paiement):
        Paiement.objects.create(nom='Moussa Fall', montant=Decimal('1800.00'), date_echeance='2024-10-01', statut='en_retard')

        response = client_admin.get('/api/paiements/', {'statut': 'en_retard'})

        assert [p['nom'] for p in response.data] == ['Moussa Fall']

    def test_marquer_paye(self, client_admin, paiement):
        response = client_admin.post(f'/api/paiements/{paiement.pk}/marquer-paye/')

        assert response.status_code == 200
        assert response.data['statut'] == 'paye'
        paiement.refresh_from_db()
        assert paiement.date_paiement is not None

        deuxieme = client_admin.post(f'/api/paiements/{paiement.pk}/marquer-paye/')
        assert deuxieme.status_code == 400

    def test_montant_negatif(self, client_admin):
        response = client_admin.post('/api/paiements/', {
            'nom': 'Awa Diop', 'montant': '-10.00', 'date_echeance': '2024-10-15',
        }, format='json')
        assert response.status_code == 400

    def test_statistiques(self, client_admin, paiement):
        response = client_admin.get('/api/paiements/statistiques/')
        assert response.data['en_attente']['nombre'] == 1
        assert response.data['payes'] == {'nombre': 0, 'montant': 0}

    def test_mes_paiements(self, client_etudiant, paiement):
        response = client_etudiant.get('/api/paiements/mes-paiements/')
        assert response.status_code == 200
        assert [p['matricule'] for p in response.data] == ['CS-2024-042']
