# analytics/tests.py
import csv
import io
from datetime import date, datetime, timezone as dt_timezone
from decimal import Decimal

import pytest
from django.core.management import call_command

from analytics.donnees import rechercher, trier, tri_par_defaut, lignes
from analytics.export import exporter_csv, nom_fichier
from cours.models import Cours


class TestTri:
    def test_nulls_en_premier(self):
        donnees = [{'n': 3}, {'n': None}, {'n': 1}]
        assert [d['n'] for d in trier(donnees, 'n')] == [None, 1, 3]

    def test_nombres_numeriques(self):
        donnees = [{'n': 10}, {'n': 9}, {'n': Decimal('9.5')}]
        assert [d['n'] for d in trier(donnees, 'n')] == [9, Decimal('9.5'), 10]

    def test_dates(self):
        donnees = [
            {'d': '2024-03-01'},
            {'d': datetime(2023, 1, 5, tzinfo=dt_timezone.utc)},
            {'d': date(2023, 6, 1)},
        ]
        assert [str(d['d'])[:4] for d in trier(donnees, 'd')] == ['2023', '2023', '2024']

    def test_texte_insensible_a_la_casse(self):
        donnees = [{'c': 'beta'}, {'c': 'Alpha'}, {'c': 'gamma'}]
        assert [d['c'] for d in trier(donnees, 'c')] == ['Alpha', 'beta', 'gamma']

    def test_ordre_descendant(self):
        donnees = [{'c': 'b'}, {'c': 'a'}, {'c': 'c'}]
        assert [d['c'] for d in trier(donnees, 'c', 'desc')] == ['c', 'b', 'a']

    def test_stabilite(self):
        donnees = [{'code': 'CS100', 'i': 1}, {'code': 'AB1', 'i': 2}, {'code': 'CS100', 'i': 3}]
        assert [d['i'] for d in trier(donnees, 'code')] == [2, 1, 3]


class TestRecherche:
    def test_recherche_dans_toutes_les_valeurs(self):
        donnees = [{'nom': 'Algo', 'professeur': 'Pr. Ndiaye'}, {'nom': 'Analyse', 'professeur': 'Pr. Sow'}]
        assert rechercher(donnees, 'NDIAYE') == [donnees[0]]

    def test_sans_terme(self):
        assert rechercher([{'a': 1}], '') == [{'a': 1}]


class TestExport:
    def test_vide(self):
        assert exporter_csv([]) == ''

    def test_entete_et_lignes(self):
        donnees = [
            {'id': 1, 'nom': 'Algo, avancée', 'credits': 6, 'professeur': None},
            {'id': 2, 'nom': 'Analyse', 'credits': 4, 'professeur': 'Pr. "Sow"'},
        ]
        contenu = exporter_csv(donnees)
        lignes_csv = contenu.splitlines()

        assert len(lignes_csv) == 3
        assert lignes_csv[0] == 'id,nom,credits,professeur'
        assert lignes_csv[1] == '"1","Algo, avancée","6",""'
        lues = list(csv.reader(io.StringIO(contenu)))
        assert lues[2] == ['2', 'Analyse', '4', 'Pr. "Sow"']

    def test_noms_de_fichier(self):
        assert nom_fichier('cours') == 'cours_all.csv'
        assert nom_fichier('series', 2) == 'series_page2.csv'


def test_tri_par_defaut():
    assert tri_par_defaut('chapitres') == 'numero'
    assert tri_par_defaut('series') == 'numero_sequence'


@pytest.mark.django_db
class TestCollectionsApi:
    def test_mot_de_passe_exclu(self, admin):
        assert all('password' not in ligne for ligne in lignes('utilisateurs'))

    def test_resume(self, client_admin):
        Cours.objects.create(code='CS100', nom='Algo', annee_academique='2024-2025')
        response = client_admin.get('/api/analytics/collections/')
        assert response.data['cours'] == 1
        assert response.data['utilisateurs'] == 1

    def test_reserve_aux_admins(self, client_etudiant):
        assert client_etudiant.get('/api/analytics/collections/cours/').status_code == 403

    def test_onglet(self, client_admin):
        Cours.objects.create(code='MA100', nom='Analyse', annee_academique='2024-2025')
        Cours.objects.create(code='CS100', nom='Algo', annee_academique='2024-2025')

        response = client_admin.get('/api/analytics/collections/cours/')

        assert response.data['tri'] == 'code'
        assert [c['code'] for c in response.data['resultats']] == ['CS100', 'MA100']

    def test_onglet_inconnu(self, client_admin):
        assert client_admin.get('/api/analytics/collections/quiz/').status_code == 404

    def test_export_page(self, client_admin):
        for i in range(3):
            Cours.objects.create(code=f'CS10{i}', nom='Algo', annee_academique='2024-2025')

        response = client_admin.get('/api/analytics/collections/cours/export/', {'page': 2, 'taille': 2})

        assert response['Content-Type'].startswith('text/csv')
        assert 'cours_page2.csv' in response['Content-Disposition']
        assert len(response.content.decode().splitlines()) == 2

    def test_export_tout_filtre(self, client_admin):
        Cours.objects.create(code='CS100', nom='Algo', annee_academique='2024-2025')
        Cours.objects.create(code='MA100', nom='Analyse', annee_academique='2024-2025')

        response = client_admin.get('/api/analytics/collections/cours/export/', {'q': 'analyse'})

        assert 'cours_all.csv' in response['Content-Disposition']
        assert len(response.content.decode().splitlines()) == 2

    def test_commande_export(self):
        Cours.objects.create(code='CS100', nom='Algo', annee_academique='2024-2025')
        sortie = io.StringIO()
        call_command('exporter_collection', 'cours', stdout=sortie, stderr=io.StringIO())
        contenu = sortie.getvalue().splitlines()
        assert len(contenu) == 2
        assert contenu[0].startswith('id,code,nom')
