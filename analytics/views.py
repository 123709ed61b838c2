# analytics/views.py
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from django.conf import settings
from django.http import HttpResponse
import logging

from cours.filtres import paginer
from utilisateurs.permissions import EstAdministrateur
from analytics.donnees import ONGLETS, OngletInconnu, lignes, rechercher, trier, tri_par_defaut
from analytics.export import exporter_csv, nom_fichier

logger = logging.getLogger(__name__)


class CollectionViewSet(viewsets.ViewSet):
    """
    Résumé des données pour le back-office : une collection par onglet,
    avec recherche, tri, pagination et export CSV.
    """
    permission_classes = [EstAdministrateur]
    lookup_field = 'onglet'
    lookup_value_regex = '[a-z]+'

    def list(self, request):
        """Nombre d'enregistrements par onglet"""
        return Response({onglet: len(lignes(onglet)) for onglet in ONGLETS})

    def _selection(self, request, onglet):
        params = request.query_params
        tri = params.get('tri') or tri_par_defaut(onglet)
        ordre = params.get('ordre', 'asc')
        donnees = trier(rechercher(lignes(onglet), params.get('q')), tri, ordre)
        return donnees, tri, ordre

    def retrieve(self, request, onglet=None):
        try:
            donnees, tri, ordre = self._selection(request, onglet)
            page = paginer(
                donnees,
                page=request.query_params.get('page', 1),
                taille=request.query_params.get('taille', settings.TAILLE_PAGE_DEFAUT)
            )
        except OngletInconnu as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except ValueError:
            return Response({'error': 'Paramètres de pagination invalides'}, status=status.HTTP_400_BAD_REQUEST)

        return Response({'onglet': onglet, 'tri': tri, 'ordre': ordre, **page})

    @action(detail=True, methods=['get'])
    def export(self, request, onglet=None):
        """Export CSV de toute la sélection ou de la page courante (?page=n)"""
        numero_page = request.query_params.get('page')
        try:
            donnees, _, _ = self._selection(request, onglet)
            if numero_page:
                page = paginer(
                    donnees,
                    page=numero_page,
                    taille=request.query_params.get('taille', settings.TAILLE_PAGE_DEFAUT)
                )
                donnees = page['resultats']
                numero_page = page['page']
        except OngletInconnu as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except ValueError:
            return Response({'error': 'Paramètres de pagination invalides'}, status=status.HTTP_400_BAD_REQUEST)

        logger.info(f"Export CSV {onglet} ({len(donnees)} lignes) par {request.user.email}")
        response = HttpResponse(exporter_csv(donnees), content_type='text/csv; charset=utf-8')
        response['Content-Disposition'] = f'attachment; filename="{nom_fichier(onglet, numero_page)}"'
        return response
