# ia/views.py
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
import logging

from utilisateurs.permissions import EstAdministrateur
from .serializers import DescriptionChapitreSerializer, DescriptionSerieSerializer
from .services import (
    IANonConfiguree, ErreurIA, generer_description_chapitre, generer_description_serie
)

logger = logging.getLogger(__name__)


def _reponse_generation(generer, **donnees):
    try:
        description = generer(**donnees)
    except IANonConfiguree as e:
        return Response({'error': str(e)}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
    except ErreurIA as e:
        return Response({'error': str(e)}, status=status.HTTP_502_BAD_GATEWAY)
    return Response({'description': description})


@api_view(['POST'])
@permission_classes([EstAdministrateur])
def description_chapitre(request):
    """Proposer une description pour un chapitre"""
    serializer = DescriptionChapitreSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    return _reponse_generation(generer_description_chapitre, **serializer.validated_data)


@api_view(['POST'])
@permission_classes([EstAdministrateur])
def description_serie(request):
    """Proposer une description pour un TD, un TP ou un examen"""
    serializer = DescriptionSerieSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data
    return _reponse_generation(
        generer_description_serie,
        titre=data['titre'], type_serie=data['type'], nom_cours=data['nom_cours']
    )
