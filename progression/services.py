# progression/services.py
import logging

from .calcul import ProgressionCours, est_identifiant
from .stockage import StockageLocal, CLE_FAVORIS, CLE_PROGRESSION

logger = logging.getLogger(__name__)


def element_du_cours(cours_id, categorie, element_id):
    """Vérifie que l'élément (chapitre, TD, TP ou examen) appartient bien au cours"""
    from cours.models import Chapitre
    from examens.models import Serie

    element_id = str(element_id)
    if not element_id.isdigit():
        return False
    if categorie == 'chapitres':
        return Chapitre.objects.filter(cours_id=cours_id, pk=element_id).exists()

    types = {'td': Serie.TYPE_TD, 'tp': Serie.TYPE_TP, 'examens': Serie.TYPE_EXAMEN}
    if categorie not in types:
        return False
    return Serie.objects.filter(cours_id=cours_id, type=types[categorie], pk=element_id).exists()


class SuiviProgression:
    """Progression de l'utilisateur pour chaque cours, enregistrée à chaque changement"""

    def __init__(self, utilisateur):
        self.stockage = StockageLocal(utilisateur)

    def _toutes(self):
        toutes = self.stockage.load(CLE_PROGRESSION) or {}
        if not isinstance(toutes, dict):
            logger.warning(f"Progression ignorée, format invalide pour {self.stockage.utilisateur}")
            return {}
        return toutes

    def _enregistrer(self, cours_id, progression):
        toutes = self._toutes()
        toutes[str(cours_id)] = progression.en_dict()
        self.stockage.save(CLE_PROGRESSION, toutes)

    def progression(self, cours_id):
        return ProgressionCours.depuis_dict(self._toutes().get(str(cours_id)))

    def pourcentages(self):
        return {
            cours_id: ProgressionCours.depuis_dict(donnees).pourcentage
            for cours_id, donnees in self._toutes().items()
        }

    def marquer_vu(self, cours_id, categorie, element_id):
        progression = self.progression(cours_id)
        if progression.marquer_vu(categorie, element_id):
            self._enregistrer(cours_id, progression)
        return progression

    def actualiser_totaux(self, cours_id, ids_par_categorie):
        progression = self.progression(cours_id)
        progression.actualiser_totaux(ids_par_categorie)
        self._enregistrer(cours_id, progression)
        return progression


class Favoris:
    """Ensemble des cours favoris de l'utilisateur"""

    def __init__(self, utilisateur):
        self.stockage = StockageLocal(utilisateur)

    def _liste(self):
        favoris = self.stockage.load(CLE_FAVORIS) or []
        if not isinstance(favoris, list):
            logger.warning(f"Favoris ignorés, format invalide pour {self.stockage.utilisateur}")
            return []
        return [str(i) for i in favoris if est_identifiant(i)]

    def ids(self):
        return set(self._liste())

    def contient(self, cours_id):
        return str(cours_id) in self.ids()

    def basculer(self, cours_id):
        """Ajoute ou retire le cours ; renvoie True s'il est désormais favori"""
        favoris = self._liste()
        cours_id = str(cours_id)
        if cours_id in favoris:
            favoris.remove(cours_id)
            est_favori = False
        else:
            favoris.append(cours_id)
            est_favori = True
        self.stockage.save(CLE_FAVORIS, favoris)
        return est_favori
