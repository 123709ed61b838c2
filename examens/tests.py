# examens/tests.py
from datetime import datetime, timedelta, timezone as dt_timezone
from unittest import mock

import pytest
from django.db import DatabaseError
from django.utils import timezone

from cours.models import Cours
from cours.sequences import ErreurSequence
from examens.models import Serie, ParametresExamen
from examens.titres import generer_titre, formater_titre, annee_depuis_debut
from examens.verrou import solutions_deverrouillees, calculer_etat, etat_verrou, masquer_solutions, EtatVerrou

DATE_EXAMEN = datetime(2025, 6, 15, 8, 0, tzinfo=dt_timezone.utc)


class TestVerrou:
    def test_sans_parametres(self):
        assert solutions_deverrouillees(None) is True

    def test_verrou_inactif(self):
        parametres = ParametresExamen(date_examen=DATE_EXAMEN, actif=False)
        assert solutions_deverrouillees(parametres, DATE_EXAMEN - timedelta(days=10)) is True

    def test_sans_date(self):
        assert solutions_deverrouillees(ParametresExamen(date_examen=None, actif=True)) is True

    def test_limite_exacte(self):
        parametres = ParametresExamen(date_examen=DATE_EXAMEN, actif=True)
        assert solutions_deverrouillees(parametres, DATE_EXAMEN - timedelta(seconds=1)) is False
        assert solutions_deverrouillees(parametres, DATE_EXAMEN) is True
        assert solutions_deverrouillees(parametres, DATE_EXAMEN + timedelta(seconds=1)) is True

    def test_etat_avec_date_et_jours_restants(self):
        parametres = ParametresExamen(date_examen=DATE_EXAMEN, actif=True)
        etat = calculer_etat(parametres, DATE_EXAMEN - timedelta(days=2, hours=3))
        assert etat.solutions_deverrouillees is False
        assert etat.jours_restants == 3
        assert '2025' in etat.date_deverrouillage

    @pytest.mark.django_db
    def test_erreur_de_lecture_ouvre_le_verrou(self):
        ParametresExamen.objects.create(date_examen=timezone.now() + timedelta(days=30), actif=True)
        with mock.patch.object(ParametresExamen, 'get_parametres', side_effect=DatabaseError('hors ligne')):
            etat = etat_verrou()
        assert etat.solutions_deverrouillees is True

    def test_masquer_solutions(self):
        series = [{'titre': 'TD1', 'url_solution': 'https://example.com/s1'}]
        etudiant = mock.Mock(est_admin=False)
        admin = mock.Mock(est_admin=True)

        assert masquer_solutions([dict(s) for s in series], EtatVerrou(False), admin)[0]['url_solution']
        assert masquer_solutions([dict(s) for s in series], EtatVerrou(False), etudiant)[0]['url_solution'] is None
        assert masquer_solutions([dict(s) for s in series], EtatVerrou(True), etudiant)[0]['url_solution']


class TestTitres:
    def test_titre_td_complet(self):
        assert generer_titre('TD', 'fr', 1, 'Logique', '2023-2024') == 'TD1 : Logique : 2023-2024'

    def test_titre_tp_anglais_sans_chapitre(self):
        assert generer_titre('TP', 'en', 3, '  ', '2023-2024') == 'PW3 : 2023-2024'

    def test_titre_td_sans_annee(self):
        assert generer_titre('TD', 'en', 2, 'Graphs', '') == 'TW2 : Graphs'

    def test_titre_examen(self):
        assert generer_titre('Exam', 'fr', annee_academique='2024-2025', type_examen='Final') == 'Examen_Final_2024-2025'
        assert generer_titre('Exam', 'en', annee_academique='2024-2025', type_examen='TD') == 'Exam_TW_2024-2025'
        assert generer_titre('Exam', 'en', annee_academique='2024-2025', type_examen='Rattrapage') == 'Exam_Rattrapage_2024-2025'

    def test_formater_titre(self):
        assert formater_titre('Examen_Final_2024-2025') == 'Examen Final 2024 2025'

    def test_annee_depuis_debut(self):
        assert annee_depuis_debut(2023) == '2023-2024'


@pytest.fixture
def cours(db):
    return Cours.objects.create(
        code='CS100', nom='Algorithmique', professeur='Pr. Ndiaye', annee_academique='2024-2025'
    )


@pytest.mark.django_db
class TestSeriesApi:
    def test_numerotation_td_et_tp(self, client_admin, cours):
        reponses = [
            client_admin.post('/api/series/', {'cours': cours.pk, 'type': type_serie, 'titre': titre}, format='json')
            for type_serie, titre in (('TD', 'Série A'), ('TD', 'Série B'), ('TP', 'Lab A'), ('Exam', 'Final'))
        ]
        assert [r.status_code for r in reponses] == [201, 201, 201, 201]
        assert [r.data['numero_sequence'] for r in reponses] == [1, 2, 1, None]

    def test_titre_automatique(self, client_admin, cours):
        response = client_admin.post('/api/series/', {
            'cours': cours.pk, 'type': 'TD', 'mode_titre': 'auto',
            'numero_serie': 1, 'titre_chapitre': 'Logique', 'annee_academique': '2023-2024',
        }, format='json')
        assert response.status_code == 201
        assert response.data['titre'] == 'TD1 : Logique : 2023 2024'

    def test_titre_automatique_avec_numero_de_sequence(self, client_admin, cours):
        response = client_admin.post('/api/series/', {
            'cours': cours.pk, 'type': 'TP', 'mode_titre': 'auto', 'langue': 'en',
        }, format='json')
        assert response.data['titre'] == 'PW1 : 2024 2025'

    def test_titre_manuel_requis(self, client_admin, cours):
        response = client_admin.post('/api/series/', {'cours': cours.pk, 'type': 'TD'}, format='json')
        assert response.status_code == 400
        assert 'titre' in response.data

    def test_echec_de_sequence(self, client_admin, cours):
        with mock.patch('examens.views.prochain_numero_serie', side_effect=ErreurSequence('conflit')):
            response = client_admin.post('/api/series/', {'cours': cours.pk, 'type': 'TD', 'titre': 'TD1'}, format='json')
        assert response.status_code == 409
        assert not Serie.objects.exists()

    def test_recherche_par_professeur(self, client_etudiant, cours):
        autre = Cours.objects.create(code='MA100', nom='Analyse', professeur='Pr. Sow', annee_academique='2024-2025')
        Serie.objects.create(cours=cours, type='TD', titre='TD1')
        Serie.objects.create(cours=autre, type='TD', titre='TD1 analyse')

        response = client_etudiant.get('/api/series/', {'search': 'ndiaye'})

        assert [s['cours_code'] for s in response.data] == ['CS100']

    def test_solution_masquee_dans_la_liste(self, client_etudiant, cours):
        ParametresExamen.objects.create(date_examen=timezone.now() + timedelta(days=1), actif=True)
        serie = Serie.objects.create(cours=cours, type='TD', titre='TD1', url_solution='https://example.com/s')

        liste = client_etudiant.get('/api/series/')
        detail = client_etudiant.get(f'/api/series/{serie.pk}/')

        assert liste.data[0]['url_solution'] is None
        assert detail.data['url_solution'] is None

    def test_solution_masquee_dans_le_detail(self, client_etudiant, client_admin, cours):
        ParametresExamen.objects.create(date_examen=timezone.now() + timedelta(days=3), actif=True)
        serie = Serie.objects.create(cours=cours, type='Exam', titre='Examen final', url_solution='https://example.com/corrige')

        etudiant = client_etudiant.get(f'/api/series/{serie.pk}/')
        admin = client_admin.get(f'/api/series/{serie.pk}/')

        assert etudiant.status_code == 200
        assert etudiant.data['url_solution'] is None
        assert etudiant.data['titre'] == 'Examen final'
        assert admin.data['url_solution'] == 'https://example.com/corrige'

    def test_etudiant_ne_peut_pas_vider(self, client_etudiant):
        assert client_etudiant.post('/api/series/vider/').status_code == 403


@pytest.mark.django_db
class TestParametresExamen:
    def test_valeurs_par_defaut(self, client_admin):
        response = client_admin.get('/api/parametres-examen/')
        assert response.status_code == 200
        assert response.data['actif'] is True
        assert response.data['annee_academique'] == '2025-2026'
        assert response.data['date_examen'] is not None

    def test_reserve_aux_admins(self, client_etudiant):
        assert client_etudiant.get('/api/parametres-examen/').status_code == 403

    def test_enregistrer_puis_verrou(self, client_admin, api_client):
        date = (timezone.now() + timedelta(days=5)).isoformat()
        response = client_admin.put('/api/parametres-examen/', {
            'date_examen': date, 'actif': True, 'annee_academique': '2024-2025',
        }, format='json')
        assert response.status_code == 200
        assert ParametresExamen.objects.count() == 1

        client_admin.put('/api/parametres-examen/', {'actif': False}, format='json')
        assert ParametresExamen.objects.count() == 1

        verrou = api_client.get('/api/parametres-examen/verrou/')
        assert verrou.status_code == 200
        assert verrou.data['solutions_deverrouillees'] is True
