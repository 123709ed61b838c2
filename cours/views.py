# cours/views.py
from rest_framework import viewsets, status, filters
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django_filters.rest_framework import DjangoFilterBackend
from django.conf import settings
import logging

from cours.models import Cours, Chapitre
from cours.serializers import CoursSerializer, CoursTableauSerializer, ChapitreSerializer
from cours.depot import Depot
from cours.sequences import ErreurSequence, prochain_code_cours, prochain_numero_chapitre
from cours.filtres import filtrer_cours, trier_cours, paginer, annees_disponibles
from cours.documents import url_apercu
from utilisateurs.permissions import EstAdministrateur, EstAdministrateurOuLecture

logger = logging.getLogger(__name__)

MESSAGE_ERREUR_ENREGISTREMENT = "Erreur lors de l'enregistrement, veuillez réessayer"


class CoursViewSet(viewsets.ModelViewSet):
    """
    ViewSet pour les cours : catalogue, détail d'un cours et tableau de bord annuel
    """
    queryset = Cours.objects.all()
    serializer_class = CoursSerializer
    permission_classes = [EstAdministrateurOuLecture]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['niveau', 'semestre', 'statut', 'type', 'annee_academique', 'langue']
    search_fields = ['code', 'nom', 'professeur']
    ordering_fields = ['code', 'nom', 'professeur', 'credits']
    ordering = ['code']

    def perform_create(self, serializer):
        cours = serializer.save(proprietaire=self.request.user)
        logger.info(f"Cours {cours.code} créé par {self.request.user.email}")

    def perform_destroy(self, instance):
        logger.info(f"Cours {instance.code} supprimé par {self.request.user.email}")
        instance.delete()

    @action(detail=False, methods=['post'], permission_classes=[EstAdministrateur])
    def vider(self, request):
        """Supprimer tous les cours (et leurs chapitres et séries)"""
        nombre = Depot(Cours).vider()
        return Response({'supprimes': nombre})

    @action(detail=False, methods=['post'], url_path='prochain-code', permission_classes=[EstAdministrateur])
    def prochain_code(self, request):
        """Réserver le prochain code pour un préfixe (CS -> CS100, CS101...)"""
        prefixe = request.data.get('prefixe', '')
        try:
            code = prochain_code_cours(prefixe)
        except ValueError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except ErreurSequence:
            return Response({'error': MESSAGE_ERREUR_ENREGISTREMENT}, status=status.HTTP_409_CONFLICT)
        return Response({'code': code})

    @action(detail=True, methods=['get'], permission_classes=[IsAuthenticated])
    def contenu(self, request, pk=None):
        """
        Page d'un cours : chapitres, TD, TP, examens, état du verrou des
        solutions et progression de l'étudiant.
        """
        from examens.models import Serie
        from examens.serializers import SerieSerializer
        from examens.verrou import etat_verrou, masquer_solutions
        from progression.services import SuiviProgression

        cours = self.get_object()
        chapitres = list(cours.chapitres.order_by('numero', 'id'))
        series = list(cours.series.all())

        par_type = {}
        for type_serie, _ in Serie.TYPE_CHOICES:
            par_type[type_serie] = sorted(
                (s for s in series if s.type == type_serie),
                key=lambda s: s.titre.casefold()
            )

        etat = etat_verrou()
        progression = SuiviProgression(request.user).actualiser_totaux(cours.pk, {
            'chapitres': [c.pk for c in chapitres],
            'td': [s.pk for s in par_type[Serie.TYPE_TD]],
            'tp': [s.pk for s in par_type[Serie.TYPE_TP]],
            'examens': [s.pk for s in par_type[Serie.TYPE_EXAMEN]],
        })

        def series_data(type_serie):
            data = [dict(s) for s in SerieSerializer(par_type[type_serie], many=True).data]
            return masquer_solutions(data, etat, request.user)

        return Response({
            'cours': CoursSerializer(cours).data,
            'sections_visibles': cours.sections_visibles,
            'chapitres': ChapitreSerializer(chapitres, many=True).data,
            'td': series_data(Serie.TYPE_TD),
            'tp': series_data(Serie.TYPE_TP),
            'examens': series_data(Serie.TYPE_EXAMEN),
            'verrou': etat.en_dict(),
            'progression': progression.pourcentage,
            'vus': progression.en_dict()['vus'],
        })

    @action(detail=False, methods=['get'], url_path='tableau-de-bord', permission_classes=[IsAuthenticated])
    def tableau_de_bord(self, request):
        """Cours d'une année académique avec filtres, tri, pagination et statistiques"""
        from progression.services import SuiviProgression, Favoris

        params = request.query_params
        tous = list(Cours.objects.all())
        annees = annees_disponibles(tous)
        annee = params.get('annee') or (annees[0] if annees else None)

        favoris = Favoris(request.user).ids()
        pourcentages = SuiviProgression(request.user).pourcentages()

        try:
            selection = filtrer_cours(
                tous,
                niveau=params.get('niveau'),
                semestre=params.get('semestre'),
                annee=annee,
                recherche=params.get('q'),
                statut=params.get('statut'),
                type_cours=params.get('type'),
                favoris=favoris if params.get('favoris') in ('1', 'true') else None,
            )
            selection = trier_cours(selection, params.get('tri', 'code'))
            page = paginer(
                selection,
                page=params.get('page', 1),
                taille=params.get('taille', settings.TAILLE_PAGE_DEFAUT)
            )
        except ValueError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        contexte = {'request': request, 'favoris': favoris, 'pourcentages': pourcentages}
        page['resultats'] = CoursTableauSerializer(page['resultats'], many=True, context=contexte).data

        return Response({
            'annee': annee,
            'annees_disponibles': annees,
            'statistiques': {
                'actifs': sum(1 for c in selection if c.statut == 'actif'),
                'termines': sum(1 for c in selection if c.statut == 'termine'),
                'credits': sum(c.credits or 0 for c in selection),
                'favoris': sum(1 for c in selection if str(c.pk) in favoris),
            },
            **page
        })


class ChapitreViewSet(viewsets.ModelViewSet):
    """
    ViewSet pour les chapitres, numérotés automatiquement par cours
    """
    queryset = Chapitre.objects.select_related('cours')
    serializer_class = ChapitreSerializer
    permission_classes = [EstAdministrateurOuLecture]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['cours', 'type_ressource', 'annee_academique']
    search_fields = ['titre', 'description', 'cours__nom', 'cours__code']
    ordering_fields = ['numero', 'date', 'titre']
    ordering = ['cours', 'numero']

    def create(self, request, *args, **kwargs):
        try:
            return super().create(request, *args, **kwargs)
        except ErreurSequence:
            return Response({'error': MESSAGE_ERREUR_ENREGISTREMENT}, status=status.HTTP_409_CONFLICT)

    def perform_create(self, serializer):
        cours = serializer.validated_data['cours']
        numero = serializer.validated_data.get('numero')
        if not numero:
            numero = prochain_numero_chapitre(cours.pk)
        chapitre = serializer.save(numero=numero)
        logger.info(f"Chapitre {chapitre.numero} ajouté au cours {cours.code}")

    @action(detail=False, methods=['post'], permission_classes=[EstAdministrateur])
    def vider(self, request):
        """Supprimer tous les chapitres"""
        nombre = Depot(Chapitre).vider()
        return Response({'supprimes': nombre})

    @action(detail=True, methods=['get'])
    def apercu(self, request, pk=None):
        """Lien intégrable du document du chapitre"""
        chapitre = self.get_object()
        if not chapitre.url_document:
            return Response({'error': 'Aucun document pour ce chapitre'}, status=status.HTTP_404_NOT_FOUND)
        return Response({'titre': chapitre.titre, 'url_apercu': url_apercu(chapitre.url_document)})
