# examens/verrou.py
"""
Verrou des solutions : les corrigés de TD/TP restent cachés aux étudiants
jusqu'à la date d'examen globale.
"""
import logging
import math
from dataclasses import dataclass
from typing import Optional

from django.db import DatabaseError
from django.utils import timezone, dateformat

logger = logging.getLogger(__name__)

FORMAT_DATE_AFFICHAGE = 'j F Y'


@dataclass
class EtatVerrou:
    solutions_deverrouillees: bool
    date_deverrouillage: Optional[str] = None
    jours_restants: int = 0

    def en_dict(self):
        return {
            'solutions_deverrouillees': self.solutions_deverrouillees,
            'date_deverrouillage': self.date_deverrouillage,
            'jours_restants': self.jours_restants,
        }


def solutions_deverrouillees(parametres, maintenant=None):
    """Vrai si aucun paramètre, verrou inactif, date absente ou date atteinte"""
    if parametres is None or not parametres.actif or parametres.date_examen is None:
        return True
    maintenant = maintenant or timezone.now()
    return maintenant >= parametres.date_examen


def calculer_etat(parametres, maintenant=None):
    maintenant = maintenant or timezone.now()
    deverrouille = solutions_deverrouillees(parametres, maintenant)

    date_affichage = None
    jours = 0
    if parametres is not None and parametres.date_examen is not None:
        date_affichage = dateformat.format(
            timezone.localtime(parametres.date_examen), FORMAT_DATE_AFFICHAGE
        )
        if not deverrouille:
            jours = math.ceil((parametres.date_examen - maintenant).total_seconds() / 86400)

    return EtatVerrou(deverrouille, date_affichage, jours)


def etat_verrou(maintenant=None):
    """
    Lit les paramètres d'examen et calcule l'état du verrou.
    En cas d'erreur de lecture, les solutions sont considérées déverrouillées.
    """
    from .models import ParametresExamen

    try:
        parametres = ParametresExamen.get_parametres()
    except DatabaseError as e:
        logger.warning(f"Lecture des paramètres d'examen impossible, verrou ouvert: {e}")
        return EtatVerrou(True)
    return calculer_etat(parametres, maintenant)


def masquer_solutions(series_data, etat, utilisateur):
    """Retire les liens de solution des séries tant que le verrou est fermé (sauf admin)"""
    if etat.solutions_deverrouillees or getattr(utilisateur, 'est_admin', False):
        return series_data
    for serie in series_data:
        serie['url_solution'] = None
    return series_data
