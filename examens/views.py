# examens/views.py
from rest_framework import viewsets, status, filters
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import AllowAny
from django_filters.rest_framework import DjangoFilterBackend
from django.db import transaction
import logging

from cours.depot import Depot
from cours.sequences import ErreurSequence, prochain_numero_serie
from examens.models import Serie, ParametresExamen
from examens.serializers import SerieSerializer, ParametresExamenSerializer
from examens.verrou import etat_verrou, masquer_solutions
from utilisateurs.permissions import EstAdministrateur, EstAdministrateurOuLecture

logger = logging.getLogger(__name__)

MESSAGE_ERREUR_ENREGISTREMENT = "Erreur lors de l'enregistrement, veuillez réessayer"


class SerieViewSet(viewsets.ModelViewSet):
    """
    ViewSet pour les séries de TD, TP et examens.
    Les liens de solution sont retirés pour les étudiants tant que le verrou est fermé.
    """
    queryset = Serie.objects.select_related('cours')
    serializer_class = SerieSerializer
    permission_classes = [EstAdministrateurOuLecture]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['cours', 'type', 'annee_academique', 'langue']
    search_fields = ['cours__code', 'cours__professeur', 'titre']
    ordering_fields = ['titre', 'date', 'numero_sequence']
    ordering = ['titre']

    def list(self, request, *args, **kwargs):
        response = super().list(request, *args, **kwargs)
        response.data = masquer_solutions([dict(s) for s in response.data], etat_verrou(), request.user)
        return response

    def retrieve(self, request, *args, **kwargs):
        response = super().retrieve(request, *args, **kwargs)
        response.data = masquer_solutions([dict(response.data)], etat_verrou(), request.user)[0]
        return response

    def create(self, request, *args, **kwargs):
        try:
            return super().create(request, *args, **kwargs)
        except ErreurSequence:
            return Response({'error': MESSAGE_ERREUR_ENREGISTREMENT}, status=status.HTTP_409_CONFLICT)

    def perform_create(self, serializer):
        type_serie = serializer.validated_data['type']
        cours = serializer.validated_data['cours']
        numero = None
        if type_serie in (Serie.TYPE_TD, Serie.TYPE_TP):
            numero = prochain_numero_serie(cours.pk, type_serie)
        serie = serializer.save(numero_sequence=numero)
        logger.info(f"Série {serie.titre} ajoutée au cours {cours.code}")

    @action(detail=False, methods=['post'], permission_classes=[EstAdministrateur])
    def vider(self, request):
        """Supprimer toutes les séries"""
        nombre = Depot(Serie).vider()
        return Response({'supprimes': nombre})


@api_view(['GET', 'PUT'])
@permission_classes([EstAdministrateur])
def parametres_examen(request):
    """
    Paramètres globaux d'examen.
    GET renvoie les valeurs par défaut si rien n'est encore enregistré.
    """
    parametres = ParametresExamen.get_parametres()

    if request.method == 'GET':
        if parametres is None:
            data = ParametresExamenSerializer(ParametresExamen(**ParametresExamen.valeurs_par_defaut())).data
            return Response(data)
        return Response(ParametresExamenSerializer(parametres).data)

    serializer = ParametresExamenSerializer(parametres, data=request.data, partial=parametres is not None)
    serializer.is_valid(raise_exception=True)
    with transaction.atomic():
        parametres = serializer.save()
    logger.info(f"Paramètres d'examen modifiés par {request.user.email}: {parametres}")
    return Response(ParametresExamenSerializer(parametres).data)


@api_view(['GET'])
@permission_classes([AllowAny])
def verrou(request):
    """État du verrou des solutions et date de déverrouillage"""
    return Response(etat_verrou().en_dict())
