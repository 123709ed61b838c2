# portail/exceptions.py
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def gestionnaire_exceptions(exc, context):
    """
    Point d'arrêt global des erreurs de l'API.
    Les erreurs DRF/HTTP gardent leur rendu habituel ; toute autre exception
    est journalisée puis renvoyée en 500 avec le texte brut de l'erreur.
    """
    response = exception_handler(exc, context)
    if response is not None:
        return response

    vue = context.get('view')
    logger.error(f"Erreur non gérée dans {vue.__class__.__name__ if vue else 'une vue'}: {exc}", exc_info=exc)
    return Response(
        {'error': 'Une erreur inattendue est survenue', 'detail': str(exc)},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR
    )
