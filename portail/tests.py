# portail/tests.py
from rest_framework.exceptions import NotFound

from portail.exceptions import gestionnaire_exceptions


def test_erreur_drf_rendue_normalement():
    response = gestionnaire_exceptions(NotFound(), {'view': None})
    assert response.status_code == 404


def test_erreur_inattendue():
    response = gestionnaire_exceptions(ValueError('boom'), {'view': None})
    assert response.status_code == 500
    assert response.data == {'error': 'Une erreur inattendue est survenue', 'detail': 'boom'}
