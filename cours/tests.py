# cours/tests.py
from unittest import mock

import pytest
from django.db import DatabaseError

from cours.depot import Depot
from cours.documents import url_apercu
from cours.filtres import annees_se_chevauchent, filtrer_cours, trier_cours, paginer, annees_disponibles
from cours.models import Cours, Chapitre, Compteur, normaliser_titre_chapitre
from cours.sequences import (
    ErreurSequence, prochaine_sequence, prochain_code_cours, prochain_numero_chapitre,
    prochain_numero_serie
)
from examens.models import Serie, ParametresExamen


def creer_cours(**champs):
    valeurs = {
        'code': 'CS100', 'nom': 'Algorithmique', 'professeur': 'Pr. Ndiaye',
        'credits': 6, 'annee_academique': '2024-2025',
    }
    valeurs.update(champs)
    return Cours.objects.create(**valeurs)


class TestAnnees:
    def test_annees_adjacentes_ne_se_chevauchent_pas(self):
        assert annees_se_chevauchent('2022-2023', '2023-2024') is False

    def test_meme_annee(self):
        assert annees_se_chevauchent('2022-2023', '2022-2023') is True

    def test_plage_pluriannuelle(self):
        assert annees_se_chevauchent('2020-2023', '2021-2022') is True

    def test_format_invalide(self):
        assert annees_se_chevauchent('2022', '2022-2023') is False

    def test_annees_disponibles(self):
        cours = [Cours(annee_academique=a) for a in ('2023-2024', '2024-2025', '2023-2024')]
        assert annees_disponibles(cours) == ['2024-2025', '2023-2024']


class TestFiltresEtTri:
    def setup_method(self):
        self.cours = [
            Cours(pk=1, code='MA200', nom='Analyse', professeur='Pr. Sow', credits=4,
                  niveau='L1', semestre=1, statut='actif', annee_academique='2024-2025'),
            Cours(pk=2, code='CS100', nom='Algorithmique', professeur='Pr. Ndiaye', credits=6,
                  niveau='L1', semestre=2, statut='termine', annee_academique='2024-2025'),
            Cours(pk=3, code='CS100', nom='Bases de données', professeur='Pr. Fall', credits=5,
                  niveau='L2', semestre=1, statut='actif', annee_academique='2023-2024'),
        ]

    def test_filtres_combines(self):
        resultat = filtrer_cours(self.cours, niveau='L1', semestre='1', annee='2024-2025')
        assert [c.pk for c in resultat] == [1]

    def test_recherche_insensible_a_la_casse(self):
        assert [c.pk for c in filtrer_cours(self.cours, recherche='ndiaye')] == [2]
        assert [c.pk for c in filtrer_cours(self.cours, recherche='cs1')] == [2, 3]

    def test_favoris_seulement(self):
        assert [c.pk for c in filtrer_cours(self.cours, favoris={'3'})] == [3]

    def test_tri_stable_par_code(self):
        resultat = trier_cours(self.cours, 'code')
        assert [c.pk for c in resultat] == [2, 3, 1]

    def test_tri_credits_decroissant(self):
        assert [c.credits for c in trier_cours(self.cours, 'credits')] == [6, 5, 4]

    def test_cle_inconnue(self):
        with pytest.raises(ValueError):
            trier_cours(self.cours, 'couleur')

    def test_pagination(self):
        page = paginer(range(45), page=3, taille=20)
        assert page['resultats'] == list(range(40, 45))
        assert page['nombre_pages'] == 3
        assert page['total'] == 45

    def test_pagination_vide(self):
        page = paginer([], page=1, taille=20)
        assert page['nombre_pages'] == 1
        assert page['resultats'] == []


class TestDocuments:
    def test_lien_de_partage(self):
        assert url_apercu('https://drive.google.com/file/d/abc123/view?usp=sharing') == (
            'https://drive.google.com/file/d/abc123/preview?rm=minimal&embedded=true'
        )

    def test_lien_avec_identifiant(self):
        assert url_apercu('https://drive.google.com/open?id=XyZ_9') == (
            'https://drive.google.com/file/d/XyZ_9/preview?rm=minimal&embedded=true'
        )

    def test_url_inconnue_inchangee(self):
        assert url_apercu('https://example.com/cours.pdf') == 'https://example.com/cours.pdf'


def test_normalisation_titre_conserve_les_annees():
    assert normaliser_titre_chapitre('Chapitre_1-Graphes 2023-2024') == 'Chapitre 1 Graphes 2023-2024'


@pytest.mark.django_db
class TestSequences:
    def test_premier_puis_increment(self):
        assert prochaine_sequence('chapitre:1') == 1
        assert prochaine_sequence('chapitre:1') == 2
        assert Compteur.objects.get(cle='chapitre:1').valeur == 2

    def test_td_et_tp_independants(self):
        assert prochain_numero_serie(7, 'TD') == 1
        assert prochain_numero_serie(7, 'TD') == 2
        assert prochain_numero_serie(7, 'TP') == 1
        assert prochain_numero_chapitre(7) == 1

    def test_codes_de_cours(self):
        assert prochain_code_cours('cs') == 'CS100'
        assert prochain_code_cours('CS') == 'CS101'
        assert prochain_code_cours('MA') == 'MA100'

    def test_echec_de_transaction(self):
        with mock.patch.object(Compteur.objects, 'select_for_update', side_effect=DatabaseError('conflit')):
            with pytest.raises(ErreurSequence):
                prochaine_sequence('code:CS', premier=100)


@pytest.mark.django_db
class TestDepot:
    def test_operations(self):
        depot = Depot(Chapitre, champ_parent='cours')
        cours = creer_cours()
        chapitre = depot.create(cours=cours, numero=1, titre='Introduction')

        assert depot.get(chapitre.pk) == chapitre
        assert list(depot.get_par_parent(cours.pk)) == [chapitre]
        assert depot.update(chapitre.pk, titre='Tris').titre == 'Tris'
        assert depot.delete(chapitre.pk) is True
        assert depot.get(chapitre.pk) is None

    def test_vider(self):
        creer_cours()
        creer_cours(code='MA100')
        assert Depot(Cours).vider() == 2
        assert not Cours.objects.exists()


@pytest.mark.django_db
class TestCoursApi:
    def test_etudiant_lecture_seule(self, client_etudiant):
        creer_cours()
        assert client_etudiant.get('/api/cours/').status_code == 200
        response = client_etudiant.post('/api/cours/', {'code': 'X1', 'nom': 'X'}, format='json')
        assert response.status_code == 403

    def test_admin_cree_un_cours(self, client_admin, admin):
        response = client_admin.post('/api/cours/', {
            'code': 'CS100', 'nom': 'Algorithmique', 'annee_academique': '2024-2025',
        }, format='json')
        assert response.status_code == 201
        assert response.data['proprietaire'] == admin.pk
        assert response.data['sections_visibles'] == {'cours': True, 'td': False, 'tp': False, 'examen': False}

    def test_annee_invalide(self, client_admin):
        response = client_admin.post('/api/cours/', {
            'code': 'CS100', 'nom': 'Algorithmique', 'annee_academique': '2024',
        }, format='json')
        assert response.status_code == 400

    def test_prochain_code(self, client_admin):
        assert client_admin.post('/api/cours/prochain-code/', {'prefixe': 'CS'}, format='json').data == {'code': 'CS100'}
        assert client_admin.post('/api/cours/prochain-code/', {'prefixe': 'CS'}, format='json').data == {'code': 'CS101'}

    def test_prochain_code_echec(self, client_admin):
        with mock.patch('cours.views.prochain_code_cours', side_effect=ErreurSequence('conflit')):
            response = client_admin.post('/api/cours/prochain-code/', {'prefixe': 'CS'}, format='json')
        assert response.status_code == 409

    def test_vider(self, client_admin):
        creer_cours()
        response = client_admin.post('/api/cours/vider/')
        assert response.data == {'supprimes': 1}


@pytest.mark.django_db
class TestChapitresApi:
    def test_numero_attribue_automatiquement(self, client_admin):
        cours = creer_cours()
        premier = client_admin.post('/api/chapitres/', {'cours': cours.pk, 'titre': 'Les_graphes'}, format='json')
        second = client_admin.post('/api/chapitres/', {'cours': cours.pk, 'titre': 'Les arbres'}, format='json')

        assert premier.status_code == 201
        assert premier.data['numero'] == 1
        assert premier.data['titre'] == 'Les graphes'
        assert premier.data['annee_academique'] == '2024-2025'
        assert second.data['numero'] == 2

    def test_numero_fourni(self, client_admin):
        cours = creer_cours()
        response = client_admin.post('/api/chapitres/', {'cours': cours.pk, 'titre': 'Annexe', 'numero': 9}, format='json')
        assert response.data['numero'] == 9
        assert not Compteur.objects.exists()

    def test_echec_de_sequence(self, client_admin):
        cours = creer_cours()
        with mock.patch('cours.views.prochain_numero_chapitre', side_effect=ErreurSequence('conflit')):
            response = client_admin.post('/api/chapitres/', {'cours': cours.pk, 'titre': 'Graphes'}, format='json')
        assert response.status_code == 409
        assert 'error' in response.data
        assert not Chapitre.objects.exists()

    def test_apercu(self, client_etudiant):
        cours = creer_cours()
        chapitre = Chapitre.objects.create(
            cours=cours, numero=1, titre='Graphes',
            url_document='https://drive.google.com/file/d/abc/view'
        )
        response = client_etudiant.get(f'/api/chapitres/{chapitre.pk}/apercu/')
        assert response.data == {
            'titre': 'Graphes',
            'url_apercu': 'https://drive.google.com/file/d/abc/preview?rm=minimal&embedded=true',
        }


@pytest.mark.django_db
class TestContenuCours:
    def test_page_du_cours(self, client_etudiant):
        cours = creer_cours(a_td=True)
        Chapitre.objects.create(cours=cours, numero=2, titre='Tris')
        Chapitre.objects.create(cours=cours, numero=1, titre='Introduction')
        Serie.objects.create(cours=cours, type='TD', titre='td2', url_solution='https://example.com/s2')
        Serie.objects.create(cours=cours, type='TD', titre='TD1', url_solution='https://example.com/s1')
        Serie.objects.create(cours=cours, type='Exam', titre='Examen Final 2024 2025')

        response = client_etudiant.get(f'/api/cours/{cours.pk}/contenu/')

        assert response.status_code == 200
        assert [c['numero'] for c in response.data['chapitres']] == [1, 2]
        assert [s['titre'] for s in response.data['td']] == ['TD1', 'td2']
        assert len(response.data['examens']) == 1
        assert response.data['sections_visibles']['td'] is True
        assert response.data['verrou']['solutions_deverrouillees'] is True
        assert response.data['progression'] == 0

    def test_solutions_masquees_avant_l_examen(self, client_etudiant, client_admin):
        from django.utils import timezone
        from datetime import timedelta

        ParametresExamen.objects.create(date_examen=timezone.now() + timedelta(days=3), actif=True)
        cours = creer_cours()
        Serie.objects.create(cours=cours, type='TD', titre='TD1', url_solution='https://example.com/s1')

        etudiant = client_etudiant.get(f'/api/cours/{cours.pk}/contenu/')
        admin = client_admin.get(f'/api/cours/{cours.pk}/contenu/')

        assert etudiant.data['verrou']['solutions_deverrouillees'] is False
        assert etudiant.data['td'][0]['url_solution'] is None
        assert admin.data['td'][0]['url_solution'] == 'https://example.com/s1'

    def test_les_elements_supprimes_sortent_de_la_progression(self, client_etudiant):
        cours = creer_cours()
        garde = Chapitre.objects.create(cours=cours, numero=1, titre='Introduction')
        supprime = Chapitre.objects.create(cours=cours, numero=2, titre='Tris')
        for chapitre in (garde, supprime):
            client_etudiant.post(f'/api/progression/cours/{cours.pk}/vu/', {
                'categorie': 'chapitres', 'element_id': chapitre.pk,
            }, format='json')
        supprime.delete()

        response = client_etudiant.get(f'/api/cours/{cours.pk}/contenu/')

        assert response.data['vus']['chapitres'] == [str(garde.pk)]
        assert response.data['progression'] == 100


@pytest.mark.django_db
class TestTableauDeBord:
    def test_annee_par_defaut_et_statistiques(self, client_etudiant):
        creer_cours(code='CS100', credits=6, statut='actif', annee_academique='2024-2025')
        favori = creer_cours(code='MA100', credits=4, statut='termine', annee_academique='2024-2025')
        creer_cours(code='CS050', credits=3, annee_academique='2023-2024')
        client_etudiant.post(f'/api/progression/favoris/{favori.pk}/basculer/')

        response = client_etudiant.get('/api/cours/tableau-de-bord/')

        assert response.status_code == 200
        assert response.data['annee'] == '2024-2025'
        assert response.data['annees_disponibles'] == ['2024-2025', '2023-2024']
        assert response.data['total'] == 2
        assert response.data['statistiques'] == {'actifs': 1, 'termines': 1, 'credits': 10, 'favoris': 1}
        est_favori = {c['code']: c['est_favori'] for c in response.data['resultats']}
        assert est_favori == {'CS100': False, 'MA100': True}

    def test_favoris_seulement_et_tri(self, client_etudiant):
        premier = creer_cours(code='CS100', credits=2)
        second = creer_cours(code='CS200', credits=8)
        for cours in (premier, second):
            client_etudiant.post(f'/api/progression/favoris/{cours.pk}/basculer/')

        response = client_etudiant.get('/api/cours/tableau-de-bord/', {'favoris': '1', 'tri': 'credits'})

        assert [c['code'] for c in response.data['resultats']] == ['CS200', 'CS100']

    def test_tri_inconnu(self, client_etudiant):
        creer_cours()
        response = client_etudiant.get('/api/cours/tableau-de-bord/', {'tri': 'couleur'})
        assert response.status_code == 400
