# utilisateurs/tests.py
from unittest import mock

import pytest
import requests
from rest_framework.authtoken.models import Token

from cours.models import Cours
from paiements.models import Paiement
from utilisateurs.contexte import ContexteAuth
from utilisateurs.erreurs import ErreurAuthentification
from utilisateurs.models import Utilisateur
from utilisateurs.services import inscrire, connecter, suggestions_adresse

pytestmark = pytest.mark.django_db


class TestInscription:
    def test_inscription_cree_etudiant_et_token(self, api_client):
        response = api_client.post('/api/utilisateurs/inscription/', {
            'email': 'Nouveau@Example.com',
            'mot_de_passe': 'Sup3r-secret',
            'nom_affichage': 'Moussa',
            'filiere': 'Informatique',
        }, format='json')

        assert response.status_code == 201
        assert response.data['utilisateur']['email'] == 'nouveau@example.com'
        assert response.data['utilisateur']['role'] == 'etudiant'
        assert response.data['utilisateur']['filiere'] == 'Informatique'
        assert Token.objects.filter(key=response.data['token']).exists()

    def test_email_deja_utilise(self, api_client, etudiant):
        response = api_client.post('/api/utilisateurs/inscription/', {
            'email': etudiant.email.upper(),
            'mot_de_passe': 'Sup3r-secret',
        }, format='json')

        assert response.status_code == 400
        assert response.data['code'] == 'email-deja-utilise'

    def test_mot_de_passe_trop_court(self):
        with pytest.raises(ErreurAuthentification) as exc:
            inscrire('court@example.com', 'a1b', 'Court')
        assert exc.value.code == 'mot-de-passe-faible'
        assert exc.value.details

    def test_champs_manquants(self, api_client):
        response = api_client.post('/api/utilisateurs/inscription/', {}, format='json')
        assert response.status_code == 400
        assert response.data['code'] == 'champs-manquants'

    def test_email_invalide(self):
        with pytest.raises(ErreurAuthentification) as exc:
            inscrire('pas-un-email', 'Sup3r-secret', '')
        assert exc.value.code == 'email-invalide'


class TestConnexion:
    def test_connexion_renvoie_token(self, api_client, etudiant):
        response = api_client.post('/api/utilisateurs/connexion/', {
            'email': etudiant.email,
            'mot_de_passe': 'MotDePasse!42',
        }, format='json')

        assert response.status_code == 200
        assert response.data['token'] == Token.objects.get(user=etudiant).key

    def test_identifiants_invalides(self, api_client, etudiant):
        response = api_client.post('/api/utilisateurs/connexion/', {
            'email': etudiant.email,
            'mot_de_passe': 'mauvais',
        }, format='json')

        assert response.status_code == 401
        assert response.data['code'] == 'identifiants-invalides'

    def test_compte_desactive(self, etudiant):
        etudiant.is_active = False
        etudiant.save()
        with pytest.raises(ErreurAuthentification) as exc:
            connecter(etudiant.email, 'MotDePasse!42')
        assert exc.value.statut_http == 403

    def test_deconnexion_supprime_le_token(self, api_client, etudiant):
        token = Token.objects.create(user=etudiant)
        api_client.credentials(HTTP_AUTHORIZATION=f'Token {token.key}')

        response = api_client.post('/api/utilisateurs/deconnexion/')

        assert response.status_code == 200
        assert not Token.objects.filter(user=etudiant).exists()


class TestSession:
    def test_session_anonyme(self, api_client):
        response = api_client.get('/api/utilisateurs/session/')
        assert response.status_code == 200
        assert response.data['est_authentifie'] is False
        assert response.data['chargement'] is False

    def test_session_admin(self, client_admin, admin):
        response = client_admin.get('/api/utilisateurs/session/')
        assert response.data['utilisateur'] == admin.email
        assert response.data['est_admin'] is True

    def test_session_superutilisateur(self, api_client, etudiant):
        etudiant.is_superuser = True
        etudiant.save()
        api_client.force_authenticate(user=etudiant)

        response = api_client.get('/api/utilisateurs/session/')

        assert response.data['profil']['role'] == 'etudiant'
        assert response.data['est_admin'] is True
        assert api_client.get('/api/utilisateurs/').status_code == 200

    def test_profil_vide_si_lecture_impossible(self, etudiant):
        from django.db import DatabaseError

        def charger(_):
            raise DatabaseError('indisponible')

        contexte = ContexteAuth(charger)
        contexte.sur_changement(etudiant)

        assert contexte.profil == {}
        assert contexte.chargement is False
        assert contexte.est_admin is False

    def test_contexte_ferme_ignore_les_changements(self, etudiant):
        contexte = ContexteAuth(lambda u: {'role': 'admin'})
        contexte.fermer()
        contexte.sur_changement(etudiant)
        assert contexte.utilisateur is None


class TestProfil:
    def test_modifier_son_profil(self, client_etudiant, etudiant):
        response = client_etudiant.patch('/api/utilisateurs/moi/', {
            'telephone': '+221 77 000 00 00',
            'role': 'admin',
        }, format='json')

        assert response.status_code == 200
        etudiant.refresh_from_db()
        assert etudiant.telephone == '+221 77 000 00 00'
        assert etudiant.role == 'etudiant'

    def test_liste_reservee_aux_admins(self, client_etudiant, client_admin):
        assert client_etudiant.get('/api/utilisateurs/').status_code == 403
        assert client_admin.get('/api/utilisateurs/').status_code == 200

    def test_vider_mes_donnees(self, client_etudiant, etudiant):
        Cours.objects.create(code='CS100', nom='Algo', annee_academique='2024-2025', proprietaire=etudiant)
        Paiement.objects.create(
            utilisateur=etudiant, nom='Awa Diop', montant='1500.00', date_echeance='2024-10-15'
        )

        response = client_etudiant.post('/api/utilisateurs/vider-mes-donnees/')

        assert response.status_code == 200
        assert response.data['supprimes'] == {'cours': 1, 'paiements': 1}
        assert not Utilisateur.objects.filter(pk=etudiant.pk).exists()


class TestSuggestionsAdresse:
    def test_requete_trop_courte(self):
        with mock.patch('utilisateurs.services.requests.get') as get:
            assert suggestions_adresse('ab') == []
        get.assert_not_called()

    def test_suggestions(self, client_etudiant):
        reponse = mock.Mock()
        reponse.json.return_value = [{'display_name': 'Dakar, Sénégal', 'lat': '14.69', 'lon': '-17.44'}]
        with mock.patch('utilisateurs.services.requests.get', return_value=reponse):
            response = client_etudiant.get('/api/utilisateurs/suggestions-adresse/', {'q': 'Dakar'})

        assert response.status_code == 200
        assert response.data == [{'libelle': 'Dakar, Sénégal', 'lat': '14.69', 'lon': '-17.44'}]

    def test_service_indisponible(self, client_etudiant):
        with mock.patch('utilisateurs.services.requests.get', side_effect=requests.ConnectionError('down')):
            response = client_etudiant.get('/api/utilisateurs/suggestions-adresse/', {'q': 'Dakar'})
        assert response.status_code == 502
