from django.core.management.base import BaseCommand

from analytics.donnees import ONGLETS, lignes, trier, tri_par_defaut
from analytics.export import exporter_csv


class Command(BaseCommand):
    help = "Exporte une collection (cours, chapitres, series, utilisateurs, paiements) au format CSV"

    def add_arguments(self, parser):
        parser.add_argument('onglet', choices=ONGLETS)
        parser.add_argument('--tri', default=None, help='Champ de tri (par défaut celui de l\'onglet)')
        parser.add_argument('--desc', action='store_true', help='Ordre décroissant')

    def handle(self, *args, **options):
        onglet = options['onglet']
        donnees = trier(
            lignes(onglet),
            options['tri'] or tri_par_defaut(onglet),
            'desc' if options['desc'] else 'asc'
        )
        self.stdout.write(exporter_csv(donnees), ending='')
        self.stderr.write(f"{len(donnees)} lignes exportées")
