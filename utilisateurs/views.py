# utilisateurs/views.py
"""
ViewSets pour les comptes : authentification, profil, session et gestion
des utilisateurs par les administrateurs.
"""

from rest_framework import viewsets, status, filters
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
import logging
import requests

from .models import Utilisateur
from .serializers import UtilisateurSerializer, ProfilSerializer, InscriptionSerializer
from .permissions import EstAdministrateur
from .erreurs import ErreurAuthentification
from .contexte import contexte_pour_requete
from .services import inscrire, connecter, deconnecter, vider_donnees_utilisateur
from .services import suggestions_adresse as chercher_adresses

logger = logging.getLogger(__name__)


class UtilisateurViewSet(viewsets.ModelViewSet):
    """ViewSet pour la gestion des utilisateurs (back-office)"""
    queryset = Utilisateur.objects.all()
    serializer_class = UtilisateurSerializer
    permission_classes = [EstAdministrateur]
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['email', 'nom_affichage', 'matricule']
    ordering_fields = ['date_creation', 'email', 'nom_affichage']
    http_method_names = ['get', 'patch', 'put', 'delete', 'post', 'head', 'options']

    def create(self, request, *args, **kwargs):
        return Response(
            {'error': 'Les comptes sont créés par inscription'},
            status=status.HTTP_405_METHOD_NOT_ALLOWED
        )

    def perform_update(self, serializer):
        utilisateur = serializer.save()
        logger.info(f"Profil {utilisateur.email} modifié par {self.request.user.email}")

    def perform_destroy(self, instance):
        logger.info(f"Utilisateur {instance.email} supprimé par {self.request.user.email}")
        instance.delete()

    # ===============================
    # AUTHENTIFICATION
    # ===============================

    @action(detail=False, methods=['post'], permission_classes=[AllowAny])
    def inscription(self, request):
        """Inscription d'un nouvel étudiant"""
        serializer = InscriptionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)

        try:
            utilisateur, token = inscrire(
                data.pop('email', ''),
                data.pop('mot_de_passe', ''),
                data.pop('nom_affichage', ''),
                **data
            )
        except ErreurAuthentification as e:
            return Response(e.en_reponse(), status=e.statut_http)

        return Response({
            'token': token.key,
            'utilisateur': UtilisateurSerializer(utilisateur).data
        }, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['post'], permission_classes=[AllowAny])
    def connexion(self, request):
        """Connexion d'un utilisateur"""
        try:
            utilisateur, token = connecter(
                request.data.get('email'),
                request.data.get('mot_de_passe')
            )
        except ErreurAuthentification as e:
            return Response(e.en_reponse(), status=e.statut_http)

        return Response({
            'token': token.key,
            'utilisateur': UtilisateurSerializer(utilisateur).data
        })

    @action(detail=False, methods=['post'], permission_classes=[IsAuthenticated])
    def deconnexion(self, request):
        """Déconnexion : le token courant est supprimé"""
        deconnecter(request.user)
        return Response({'message': 'Déconnexion réussie'})

    @action(detail=False, methods=['get'], permission_classes=[AllowAny])
    def session(self, request):
        """État de session : utilisateur, profil, rôle"""
        contexte = contexte_pour_requete(request)
        try:
            return Response(contexte.instantane())
        finally:
            contexte.fermer()

    # ===============================
    # PROFIL
    # ===============================

    @action(detail=False, methods=['get', 'patch'], permission_classes=[IsAuthenticated])
    def moi(self, request):
        """Lire ou modifier son propre profil"""
        if request.method == 'GET':
            return Response(ProfilSerializer(request.user).data)

        serializer = ProfilSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)

    @action(detail=False, methods=['post'], url_path='vider-mes-donnees', permission_classes=[IsAuthenticated])
    def vider_mes_donnees(self, request):
        """Supprime le compte de l'utilisateur et toutes ses données"""
        resultat = vider_donnees_utilisateur(request.user)
        return Response({'message': 'Données supprimées', 'supprimes': resultat})

    @action(detail=True, methods=['post'], url_path='vider-donnees')
    def vider_donnees(self, request, pk=None):
        """Suppression complète des données d'un utilisateur (admin)"""
        utilisateur = self.get_object()
        resultat = vider_donnees_utilisateur(utilisateur)
        return Response({'message': 'Données supprimées', 'supprimes': resultat})

    @action(detail=False, methods=['get'], url_path='suggestions-adresse', permission_classes=[IsAuthenticated])
    def suggestions_adresse(self, request):
        """Autocomplétion d'adresse pour le formulaire de profil"""
        try:
            suggestions = chercher_adresses(request.query_params.get('q', ''))
        except requests.RequestException as e:
            logger.error(f"Erreur lors de la recherche d'adresse: {e}")
            return Response(
                {'error': 'Service de géocodage indisponible'},
                status=status.HTTP_502_BAD_GATEWAY
            )
        return Response(suggestions)
