# progression/stockage.py
"""
Stockage clé/valeur par utilisateur, avec version de schéma et migration
à la lecture.
"""
import logging

from django.db import transaction

from .calcul import est_identifiant
from .models import DonneeLocale

logger = logging.getLogger(__name__)

CLE_FAVORIS = 'bookmarkedCourses'
CLE_PROGRESSION = 'courseProgress'

VERSION_SCHEMA = 1

# Anciens noms de champs de la progression (schéma v0)
CHAMPS_V0 = {
    'chapitres': ('viewedChapters', 'totalChapters'),
    'td': ('viewedTD', 'totalTD'),
    'tp': ('viewedTP', 'totalTP'),
    'examens': ('viewedExams', 'totalExams'),
}


def _liste(valeur):
    return [i for i in valeur if est_identifiant(i)] if isinstance(valeur, list) else []


def _progression_v0_vers_v1(valeur):
    if not isinstance(valeur, dict):
        logger.warning(f"Progression v0 ignorée, format invalide: {valeur!r}")
        return {}
    migree = {}
    for cours_id, ancien in valeur.items():
        if not isinstance(ancien, dict):
            logger.warning(f"Progression v0 du cours {cours_id} ignorée")
            continue
        if 'vus' in ancien or 'totaux' in ancien:
            migree[cours_id] = ancien
            continue
        migree[cours_id] = {
            'vus': {c: _liste(ancien.get(vus)) for c, (vus, _) in CHAMPS_V0.items()},
            'totaux': {c: ancien.get(total, 0) for c, (_, total) in CHAMPS_V0.items()},
        }
    return migree


def _favoris_v0_vers_v1(valeur):
    if not isinstance(valeur, list):
        logger.warning(f"Favoris v0 ignorés, format invalide: {valeur!r}")
        return []
    return [str(i) for i in valeur if est_identifiant(i)]


MIGRATIONS = {
    CLE_PROGRESSION: {0: _progression_v0_vers_v1},
    CLE_FAVORIS: {0: _favoris_v0_vers_v1},
}


class StockageLocal:
    def __init__(self, utilisateur):
        self.utilisateur = utilisateur

    def load(self, cle):
        """Renvoie la valeur migrée vers le schéma courant, ou None"""
        donnee = DonneeLocale.objects.filter(utilisateur=self.utilisateur, cle=cle).first()
        if donnee is None:
            return None
        if donnee.version >= VERSION_SCHEMA:
            return donnee.valeur

        valeur = donnee.valeur
        etapes = MIGRATIONS.get(cle, {})
        for version in range(donnee.version, VERSION_SCHEMA):
            if version in etapes:
                valeur = etapes[version](valeur)
        logger.info(f"Migration de {cle} v{donnee.version} -> v{VERSION_SCHEMA} pour {self.utilisateur.email}")
        self.save(cle, valeur)
        return valeur

    def save(self, cle, valeur, version=VERSION_SCHEMA):
        with transaction.atomic():
            DonneeLocale.objects.update_or_create(
                utilisateur=self.utilisateur,
                cle=cle,
                defaults={'valeur': valeur, 'version': version}
            )
        return valeur
