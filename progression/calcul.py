# progression/calcul.py
from decimal import Decimal, ROUND_HALF_UP
import logging

logger = logging.getLogger(__name__)

CATEGORIES = ('chapitres', 'td', 'tp', 'examens')


def est_identifiant(valeur):
    return isinstance(valeur, (str, int)) and not isinstance(valeur, bool)


def ids_valides(valeur):
    """Liste d'identifiants (chaînes ou entiers)"""
    return isinstance(valeur, list) and all(est_identifiant(i) for i in valeur)


def enregistrement_valide(donnees):
    """Vérifie la forme {'vus': {catégorie: [ids]}, 'totaux': {catégorie: entier}}"""
    if not isinstance(donnees, dict):
        return False
    vus = donnees.get('vus') or {}
    totaux = donnees.get('totaux') or {}
    if not isinstance(vus, dict) or not isinstance(totaux, dict):
        return False
    for categorie in CATEGORIES:
        if not ids_valides(vus.get(categorie, [])):
            return False
        total = totaux.get(categorie)
        if total is None:
            continue
        if isinstance(total, bool) or not isinstance(total, int) or total < 0:
            return False
    return True


def calculer_pourcentage(totaux, vus):
    """
    Pourcentage d'avancement d'un cours : éléments vus / éléments existants,
    arrondi à l'entier (demi vers le haut), borné à [0, 100], 0 si rien à voir.
    """
    total = sum(int(totaux.get(c, 0) or 0) for c in CATEGORIES)
    if total <= 0:
        return 0
    nombre_vus = sum(len(vus.get(c, ())) for c in CATEGORIES)
    pourcentage = (Decimal(100 * nombre_vus) / Decimal(total)).quantize(Decimal('1'), rounding=ROUND_HALF_UP)
    return max(0, min(100, int(pourcentage)))


class ProgressionCours:
    """Éléments vus et totaux d'un cours, par catégorie"""

    def __init__(self, vus=None, totaux=None):
        vus = vus or {}
        totaux = totaux or {}
        self.vus = {c: {str(i) for i in vus.get(c, [])} for c in CATEGORIES}
        self.totaux = {c: int(totaux.get(c, 0) or 0) for c in CATEGORIES}

    @classmethod
    def depuis_dict(cls, donnees):
        donnees = donnees or {}
        if not enregistrement_valide(donnees):
            logger.warning(f"Progression ignorée, format invalide: {donnees!r}")
            return cls()
        return cls(donnees.get('vus'), donnees.get('totaux'))

    def en_dict(self):
        return {
            'vus': {c: sorted(self.vus[c]) for c in CATEGORIES},
            'totaux': dict(self.totaux),
        }

    @property
    def pourcentage(self):
        return calculer_pourcentage(self.totaux, self.vus)

    def marquer_vu(self, categorie, element_id):
        """Ajoute l'élément ; renvoie False s'il était déjà vu"""
        if categorie not in CATEGORIES:
            raise ValueError(f"Catégorie inconnue: {categorie}")
        element_id = str(element_id)
        if element_id in self.vus[categorie]:
            return False
        self.vus[categorie].add(element_id)
        return True

    def actualiser_totaux(self, ids_par_categorie):
        """
        Remplace les totaux par le contenu actuel du cours et oublie les
        éléments vus qui n'existent plus.
        """
        for categorie in CATEGORIES:
            ids = {str(i) for i in ids_par_categorie.get(categorie, [])}
            self.totaux[categorie] = len(ids)
            self.vus[categorie] &= ids
