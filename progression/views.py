# progression/views.py
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.shortcuts import get_object_or_404
import logging

from cours.models import Cours
from progression.serializers import MarquerVuSerializer, DonneeLocaleSerializer
from progression.services import SuiviProgression, Favoris, element_du_cours
from progression.stockage import StockageLocal, VERSION_SCHEMA

logger = logging.getLogger(__name__)


class ProgressionViewSet(viewsets.ViewSet):
    """
    Progression et favoris de l'utilisateur connecté
    """
    permission_classes = [IsAuthenticated]

    def list(self, request):
        """Pourcentage d'avancement par cours et cours favoris"""
        suivi = SuiviProgression(request.user)
        return Response({
            'progression': suivi.pourcentages(),
            'favoris': sorted(Favoris(request.user).ids()),
        })

    @action(detail=False, methods=['get'], url_path=r'cours/(?P<cours_id>\d+)')
    def cours(self, request, cours_id=None):
        """Détail de la progression d'un cours"""
        get_object_or_404(Cours, pk=cours_id)
        progression = SuiviProgression(request.user).progression(cours_id)
        return Response({
            'cours': int(cours_id),
            'pourcentage': progression.pourcentage,
            **progression.en_dict()
        })

    @action(detail=False, methods=['post'], url_path=r'cours/(?P<cours_id>\d+)/vu')
    def marquer_vu(self, request, cours_id=None):
        """Marquer un chapitre, un TD, un TP ou un examen comme vu"""
        get_object_or_404(Cours, pk=cours_id)
        serializer = MarquerVuSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        categorie = serializer.validated_data['categorie']
        element_id = serializer.validated_data['element_id']

        if not element_du_cours(cours_id, categorie, element_id):
            return Response(
                {'error': "Cet élément n'appartient pas au cours"},
                status=status.HTTP_404_NOT_FOUND
            )

        progression = SuiviProgression(request.user).marquer_vu(cours_id, categorie, element_id)
        return Response({
            'cours': int(cours_id),
            'pourcentage': progression.pourcentage,
            **progression.en_dict()
        })

    @action(detail=False, methods=['get'])
    def favoris(self, request):
        return Response(sorted(Favoris(request.user).ids()))

    @action(detail=False, methods=['post'], url_path=r'favoris/(?P<cours_id>\d+)/basculer')
    def basculer_favori(self, request, cours_id=None):
        """Ajouter ou retirer un cours des favoris"""
        get_object_or_404(Cours, pk=cours_id)
        est_favori = Favoris(request.user).basculer(cours_id)
        return Response({'cours': int(cours_id), 'est_favori': est_favori})

    @action(detail=False, methods=['get', 'put'], url_path=r'stockage/(?P<cle>[\w-]+)')
    def stockage(self, request, cle=None):
        """Lecture ou écriture brute d'une clé du stockage"""
        stockage = StockageLocal(request.user)

        if request.method == 'GET':
            valeur = stockage.load(cle)
            if valeur is None:
                return Response({'error': 'Clé introuvable'}, status=status.HTTP_404_NOT_FOUND)
            return Response({'cle': cle, 'valeur': valeur, 'version': VERSION_SCHEMA})

        serializer = DonneeLocaleSerializer(data=request.data, context={'cle': cle})
        serializer.is_valid(raise_exception=True)
        version = serializer.validated_data.get('version', VERSION_SCHEMA)
        stockage.save(cle, serializer.validated_data['valeur'], version=version)
        logger.info(f"Clé {cle} (v{version}) enregistrée pour {request.user.email}")
        return Response({'cle': cle, 'valeur': stockage.load(cle), 'version': VERSION_SCHEMA})
