# ia/tests.py
from unittest import mock

import httpx
import ollama
import pytest

from ia.services import (
    IANonConfiguree, ErreurIA, generer_description_chapitre, generer_description_serie
)


def reponse_chat(contenu):
    return {'message': {'role': 'assistant', 'content': contenu}}


class TestServices:
    def test_cle_absente(self, settings):
        settings.IA_API_KEY = ''
        with pytest.raises(IANonConfiguree):
            generer_description_chapitre('Graphes', 'Algorithmique', 'Pr. Ndiaye')

    def test_cle_exemple(self, settings):
        settings.IA_API_KEY = 'your_api_key_here'
        with pytest.raises(IANonConfiguree):
            generer_description_serie('TD1', 'TD', 'Algorithmique')

    def test_description_chapitre(self, settings):
        settings.IA_API_KEY = 'cle-test'
        settings.IA_HOTE = 'https://ollama.example.com'
        with mock.patch('ia.services.ollama.Client') as Client:
            Client.return_value.chat.return_value = reponse_chat('  Ce chapitre présente les graphes.  ')
            description = generer_description_chapitre('Graphes', 'Algorithmique', 'Pr. Ndiaye')

        assert description == 'Ce chapitre présente les graphes.'
        Client.assert_called_once_with(
            host='https://ollama.example.com', headers={'Authorization': 'Bearer cle-test'}
        )
        prompt = Client.return_value.chat.call_args.kwargs['messages'][0]['content']
        assert 'Chapter Title: Graphes' in prompt
        assert 'Professor: Pr. Ndiaye' in prompt

    def test_description_serie_type(self, settings):
        settings.IA_API_KEY = 'cle-test'
        with mock.patch('ia.services.ollama.Client') as Client:
            Client.return_value.chat.return_value = reponse_chat('Exercices sur les arbres.')
            generer_description_serie('TP2', 'TP', 'Algorithmique')

        prompt = Client.return_value.chat.call_args.kwargs['messages'][0]['content']
        assert 'Travaux Pratiques (Practical Lab Work)' in prompt

    def test_reponse_vide(self, settings):
        settings.IA_API_KEY = 'cle-test'
        with mock.patch('ia.services.ollama.Client') as Client:
            Client.return_value.chat.return_value = reponse_chat('   ')
            with pytest.raises(ErreurIA):
                generer_description_serie('TD1', 'TD', 'Algorithmique')

    def test_erreur_du_service(self, settings):
        settings.IA_API_KEY = 'cle-test'
        with mock.patch('ia.services.ollama.Client') as Client:
            Client.return_value.chat.side_effect = ollama.ResponseError('unauthorized', 401)
            with pytest.raises(ErreurIA):
                generer_description_chapitre('Graphes', 'Algorithmique', '')

    def test_delai_depasse(self, settings):
        settings.IA_API_KEY = 'cle-test'
        with mock.patch('ia.services.ollama.Client') as Client:
            Client.return_value.chat.side_effect = httpx.ReadTimeout('timed out')
            with pytest.raises(ErreurIA):
                generer_description_serie('TD1', 'TD', 'Algorithmique')


@pytest.mark.django_db
class TestVues:
    def test_non_configuree(self, client_admin, settings):
        settings.IA_API_KEY = ''
        response = client_admin.post('/api/ia/description-chapitre/', {
            'titre': 'Graphes', 'nom_cours': 'Algorithmique',
        }, format='json')
        assert response.status_code == 503
        assert 'IA_API_KEY' in response.data['error']

    def test_reserve_aux_admins(self, client_etudiant):
        response = client_etudiant.post('/api/ia/description-serie/', {
            'titre': 'TD1', 'type': 'TD', 'nom_cours': 'Algorithmique',
        }, format='json')
        assert response.status_code == 403

    def test_description_serie(self, client_admin):
        with mock.patch('ia.views.generer_description_serie', return_value='Une série sur les tris.') as generer:
            response = client_admin.post('/api/ia/description-serie/', {
                'titre': 'TD1', 'type': 'TD', 'nom_cours': 'Algorithmique',
            }, format='json')

        assert response.status_code == 200
        assert response.data == {'description': 'Une série sur les tris.'}
        generer.assert_called_once_with(titre='TD1', type_serie='TD', nom_cours='Algorithmique')

    def test_delai_depasse_renvoie_502(self, client_admin, settings):
        settings.IA_API_KEY = 'cle-test'
        with mock.patch('ia.services.ollama.Client') as Client:
            Client.return_value.chat.side_effect = httpx.ConnectTimeout('timed out')
            response = client_admin.post('/api/ia/description-chapitre/', {
                'titre': 'Graphes', 'nom_cours': 'Algorithmique',
            }, format='json')
        assert response.status_code == 502
