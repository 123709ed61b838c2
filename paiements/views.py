# paiements/views.py
from rest_framework import viewsets, status, filters
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django_filters.rest_framework import DjangoFilterBackend
from django.db.models import Sum, Count
import logging

from .models import Paiement
from .serializers import PaiementSerializer
from utilisateurs.permissions import EstAdministrateur

logger = logging.getLogger(__name__)


class PaiementViewSet(viewsets.ModelViewSet):
    """ViewSet pour le suivi des paiements (back-office)"""
    queryset = Paiement.objects.select_related('utilisateur')
    serializer_class = PaiementSerializer
    permission_classes = [EstAdministrateur]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['utilisateur', 'statut', 'departement']
    search_fields = ['nom', 'matricule', 'departement']
    ordering_fields = ['date_echeance', 'montant', 'nom']
    ordering = ['date_echeance']

    def perform_create(self, serializer):
        paiement = serializer.save()
        logger.info(f"Paiement {paiement.id} créé par {self.request.user.email}")

    @action(detail=True, methods=['post'], url_path='marquer-paye')
    def marquer_paye(self, request, pk=None):
        """Marquer un paiement comme payé"""
        paiement = self.get_object()
        if paiement.est_paye:
            return Response({'error': 'Ce paiement est déjà réglé'}, status=status.HTTP_400_BAD_REQUEST)
        paiement.marquer_paye()
        logger.info(f"Paiement {paiement.id} marqué payé par {request.user.email}")
        return Response(self.get_serializer(paiement).data)

    @action(detail=False, methods=['get'])
    def statistiques(self, request):
        """Montants et nombre de paiements par statut"""
        par_statut = {
            ligne['statut']: {'nombre': ligne['nombre'], 'montant': ligne['montant']}
            for ligne in Paiement.objects.values('statut').annotate(
                nombre=Count('id'), montant=Sum('montant')
            )
        }
        vide = {'nombre': 0, 'montant': 0}
        return Response({
            'payes': par_statut.get('paye', vide),
            'en_attente': par_statut.get('en_attente', vide),
            'en_retard': par_statut.get('en_retard', vide),
        })

    @action(detail=False, methods=['get'], url_path='mes-paiements', permission_classes=[IsAuthenticated])
    def mes_paiements(self, request):
        """Paiements de l'utilisateur connecté"""
        paiements = Paiement.objects.filter(utilisateur=request.user).order_by('date_echeance')
        return Response(self.get_serializer(paiements, many=True).data)
