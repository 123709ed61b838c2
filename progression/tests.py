# progression/tests.py
import pytest

from cours.models import Cours, Chapitre
from examens.models import Serie
from progression.calcul import ProgressionCours, calculer_pourcentage, enregistrement_valide
from progression.models import DonneeLocale
from progression.services import SuiviProgression, Favoris
from progression.stockage import StockageLocal, CLE_PROGRESSION, CLE_FAVORIS, VERSION_SCHEMA


class TestPourcentage:
    def test_rien_a_voir(self):
        assert calculer_pourcentage({'chapitres': 0, 'td': 0, 'tp': 0, 'examens': 0}, {}) == 0

    def test_moitie(self):
        totaux = {'chapitres': 4, 'td': 0, 'tp': 0, 'examens': 0}
        assert calculer_pourcentage(totaux, {'chapitres': {'a', 'b'}}) == 50

    def test_arrondi_demi_vers_le_haut(self):
        assert calculer_pourcentage({'chapitres': 8}, {'chapitres': {'1'}}) == 13
        assert calculer_pourcentage({'chapitres': 3}, {'chapitres': {'1'}}) == 33

    def test_borne_a_cent(self):
        assert calculer_pourcentage({'chapitres': 1}, {'chapitres': {'1', '2', '3'}}) == 100

    def test_marquer_vu_idempotent(self):
        progression = ProgressionCours(totaux={'chapitres': 4})
        assert progression.marquer_vu('chapitres', 'a') is True
        assert progression.marquer_vu('chapitres', 'b') is True
        assert progression.pourcentage == 50
        assert progression.marquer_vu('chapitres', 'a') is False
        assert progression.pourcentage == 50

    def test_categorie_inconnue(self):
        with pytest.raises(ValueError):
            ProgressionCours().marquer_vu('quiz', 1)

    def test_actualiser_totaux(self):
        progression = ProgressionCours(vus={'td': ['1', '2']}, totaux={'td': 5})
        progression.actualiser_totaux({'td': [2, 3], 'chapitres': [10]})
        assert progression.totaux == {'chapitres': 1, 'td': 2, 'tp': 0, 'examens': 0}
        assert progression.vus['td'] == {'2'}

    def test_format_d_enregistrement(self):
        assert enregistrement_valide({'vus': {'td': ['1', 2]}, 'totaux': {'td': 3}})
        assert not enregistrement_valide('x')
        assert not enregistrement_valide({'vus': {'td': '1'}})
        assert not enregistrement_valide({'totaux': {'chapitres': -1}})

    def test_enregistrement_invalide_ignore(self):
        assert ProgressionCours.depuis_dict('x').pourcentage == 0
        assert ProgressionCours.depuis_dict({'vus': 5}).totaux['chapitres'] == 0


@pytest.mark.django_db
class TestStockage:
    def test_lecture_absente(self, etudiant):
        assert StockageLocal(etudiant).load(CLE_FAVORIS) is None

    def test_ecriture_et_lecture(self, etudiant):
        stockage = StockageLocal(etudiant)
        stockage.save(CLE_FAVORIS, ['1', '2'])
        assert stockage.load(CLE_FAVORIS) == ['1', '2']
        assert DonneeLocale.objects.get(utilisateur=etudiant, cle=CLE_FAVORIS).version == VERSION_SCHEMA

    def test_migration_de_l_ancien_format(self, etudiant):
        DonneeLocale.objects.create(utilisateur=etudiant, cle=CLE_PROGRESSION, version=0, valeur={
            '12': {
                'viewedChapters': ['a', 'b'], 'viewedTD': [], 'viewedTP': ['c'], 'viewedExams': [],
                'totalChapters': 4, 'totalTD': 2, 'totalTP': 1, 'totalExams': 1,
            }
        })

        valeur = StockageLocal(etudiant).load(CLE_PROGRESSION)

        assert valeur['12']['vus']['chapitres'] == ['a', 'b']
        assert valeur['12']['totaux'] == {'chapitres': 4, 'td': 2, 'tp': 1, 'examens': 1}
        assert DonneeLocale.objects.get(utilisateur=etudiant, cle=CLE_PROGRESSION).version == VERSION_SCHEMA
        assert SuiviProgression(etudiant).progression(12).pourcentage == 38

    def test_migration_des_favoris(self, etudiant):
        DonneeLocale.objects.create(utilisateur=etudiant, cle=CLE_FAVORIS, version=0, valeur=[3, 5])
        assert Favoris(etudiant).ids() == {'3', '5'}

    def test_migration_de_donnees_invalides(self, etudiant):
        DonneeLocale.objects.create(utilisateur=etudiant, cle=CLE_FAVORIS, version=0, valeur=5)
        DonneeLocale.objects.create(utilisateur=etudiant, cle=CLE_PROGRESSION, version=0, valeur={'3': 'x'})

        assert Favoris(etudiant).ids() == set()
        assert SuiviProgression(etudiant).pourcentages() == {}

    def test_donnees_separees_par_utilisateur(self, etudiant, admin):
        Favoris(etudiant).basculer(1)
        assert Favoris(admin).ids() == set()


@pytest.mark.django_db
class TestFavoris:
    def test_basculer(self, etudiant):
        favoris = Favoris(etudiant)
        assert favoris.basculer(7) is True
        assert favoris.contient(7)
        assert favoris.basculer('7') is False
        assert not favoris.contient(7)


@pytest.fixture
def cours(db):
    return Cours.objects.create(code='CS100', nom='Algorithmique', annee_academique='2024-2025')


@pytest.mark.django_db
class TestProgressionApi:
    def test_authentification_requise(self, api_client):
        assert api_client.get('/api/progression/').status_code in (401, 403)

    def test_marquer_vu(self, client_etudiant, etudiant, cours):
        chapitres = [Chapitre.objects.create(cours=cours, numero=n, titre=f'Chapitre {n}') for n in range(1, 5)]
        SuiviProgression(etudiant).actualiser_totaux(cours.pk, {'chapitres': [c.pk for c in chapitres]})

        url = f'/api/progression/cours/{cours.pk}/vu/'
        client_etudiant.post(url, {'categorie': 'chapitres', 'element_id': chapitres[0].pk}, format='json')
        response = client_etudiant.post(url, {'categorie': 'chapitres', 'element_id': chapitres[0].pk}, format='json')

        assert response.status_code == 200
        assert response.data['pourcentage'] == 25
        assert client_etudiant.get('/api/progression/').data['progression'] == {str(cours.pk): 25}

    def test_categorie_invalide(self, client_etudiant, cours):
        response = client_etudiant.post(
            f'/api/progression/cours/{cours.pk}/vu/', {'categorie': 'quiz', 'element_id': 1}, format='json'
        )
        assert response.status_code == 400

    def test_cours_introuvable(self, client_etudiant):
        assert client_etudiant.get('/api/progression/cours/999/').status_code == 404

    def test_favoris(self, client_etudiant, cours):
        response = client_etudiant.post(f'/api/progression/favoris/{cours.pk}/basculer/')
        assert response.data == {'cours': cours.pk, 'est_favori': True}
        assert client_etudiant.get('/api/progression/favoris/').data == [str(cours.pk)]

    def test_stockage_brut(self, client_etudiant):
        assert client_etudiant.get('/api/progression/stockage/bookmarkedCourses/').status_code == 404

        response = client_etudiant.put(
            '/api/progression/stockage/bookmarkedCourses/', {'valeur': [4], 'version': 0}, format='json'
        )

        assert response.status_code == 200
        assert response.data['valeur'] == ['4']
        assert response.data['version'] == VERSION_SCHEMA

    def test_element_d_un_autre_cours_refuse(self, client_etudiant, etudiant, cours):
        autre = Cours.objects.create(code='MA100', nom='Analyse', annee_academique='2024-2025')
        chapitres = [Chapitre.objects.create(cours=cours, numero=n, titre=f'Chapitre {n}') for n in (1, 2)]
        etranger = Chapitre.objects.create(cours=autre, numero=1, titre='Suites')
        SuiviProgression(etudiant).actualiser_totaux(cours.pk, {'chapitres': [c.pk for c in chapitres]})

        url = f'/api/progression/cours/{cours.pk}/vu/'
        for element_id in (etranger.pk, 999, 'abc'):
            response = client_etudiant.post(url, {'categorie': 'chapitres', 'element_id': element_id}, format='json')
            assert response.status_code == 404

        assert SuiviProgression(etudiant).progression(cours.pk).pourcentage == 0
        assert client_etudiant.get('/api/progression/').data['progression'] == {str(cours.pk): 0}

    def test_serie_verifiee_par_type(self, client_etudiant, etudiant, cours):
        td = Serie.objects.create(cours=cours, type='TD', titre='TD1')
        SuiviProgression(etudiant).actualiser_totaux(cours.pk, {'td': [td.pk]})
        url = f'/api/progression/cours/{cours.pk}/vu/'

        assert client_etudiant.post(url, {'categorie': 'tp', 'element_id': td.pk}, format='json').status_code == 404

        response = client_etudiant.post(url, {'categorie': 'td', 'element_id': td.pk}, format='json')
        assert response.status_code == 200
        assert response.data['pourcentage'] == 100

    def test_stockage_progression_invalide(self, client_etudiant, etudiant):
        url = '/api/progression/stockage/courseProgress/'

        assert client_etudiant.put(url, {'valeur': {'1': 'x'}}, format='json').status_code == 400
        assert client_etudiant.put(url, {'valeur': ['x']}, format='json').status_code == 400
        assert client_etudiant.put(url, {'valeur': {'1': {'vus': {'td': 3}}}}, format='json').status_code == 400
        assert not DonneeLocale.objects.filter(utilisateur=etudiant).exists()

        valide = {'1': {'vus': {'td': ['4']}, 'totaux': {'td': 2}}}
        assert client_etudiant.put(url, {'valeur': valide}, format='json').status_code == 200

    def test_stockage_favoris_invalide(self, client_etudiant):
        url = '/api/progression/stockage/bookmarkedCourses/'
        assert client_etudiant.put(url, {'valeur': 5}, format='json').status_code == 400
        assert client_etudiant.put(url, {'valeur': [{'id': 1}]}, format='json').status_code == 400

    def test_tableau_de_bord_avec_donnees_corrompues(self, client_etudiant, etudiant, cours):
        DonneeLocale.objects.create(
            utilisateur=etudiant, cle=CLE_PROGRESSION, valeur={str(cours.pk): 'x'}, version=VERSION_SCHEMA
        )
        DonneeLocale.objects.create(utilisateur=etudiant, cle=CLE_FAVORIS, valeur=5, version=VERSION_SCHEMA)

        response = client_etudiant.get('/api/cours/tableau-de-bord/')

        assert response.status_code == 200
        assert response.data['statistiques']['favoris'] == 0
        assert Favoris(etudiant).basculer(cours.pk) is True
        assert Favoris(etudiant).ids() == {str(cours.pk)}
