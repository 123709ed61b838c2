# cours/filtres.py
"""
Filtrage, tri et pagination de la liste des cours (tableau de bord annuel).
Fonctions pures sur des listes de cours déjà chargées.
"""
import math
import re

FORMAT_ANNEE = re.compile(r'^\s*(\d{4})\s*-\s*(\d{4})\s*$')

CLES_TRI_TEXTE = ('code', 'nom', 'professeur')
CLE_TRI_CREDITS = 'credits'


def plage_annees(annee_academique):
    """'2022-2024' -> (2022, 2024) ; None si le format est invalide"""
    correspondance = FORMAT_ANNEE.match(annee_academique or '')
    if not correspondance:
        return None
    return int(correspondance.group(1)), int(correspondance.group(2))


def annees_se_chevauchent(annee1, annee2):
    """
    Deux années académiques se chevauchent si leurs intervalles se recoupent
    strictement : '2022-2023' et '2023-2024' ne se chevauchent pas.
    """
    plage1 = plage_annees(annee1)
    plage2 = plage_annees(annee2)
    if plage1 is None or plage2 is None:
        return False
    debut1, fin1 = plage1
    debut2, fin2 = plage2
    return debut1 < fin2 and debut2 < fin1


def _correspond_recherche(cours, recherche):
    terme = recherche.casefold()
    return any(
        terme in (valeur or '').casefold()
        for valeur in (cours.nom, cours.professeur, cours.code)
    )


def filtrer_cours(cours, niveau=None, semestre=None, annee=None, recherche=None,
                  statut=None, type_cours=None, favoris=None):
    """
    Applique tous les filtres renseignés (ET logique).
    `favoris` : ensemble d'identifiants (texte) ; si fourni, seuls les cours favoris sont gardés.
    """
    resultat = []
    for c in cours:
        if niveau and c.niveau != niveau:
            continue
        if semestre and int(c.semestre) != int(semestre):
            continue
        if annee and not annees_se_chevauchent(c.annee_academique, annee):
            continue
        if recherche and not _correspond_recherche(c, recherche):
            continue
        if statut and c.statut != statut:
            continue
        if type_cours and c.type != type_cours:
            continue
        if favoris is not None and str(c.pk) not in favoris:
            continue
        resultat.append(c)
    return resultat


def trier_cours(cours, cle='code'):
    """Tri stable : code, nom, professeur (insensible à la casse) ou crédits décroissants"""
    if cle == CLE_TRI_CREDITS:
        return sorted(cours, key=lambda c: c.credits or 0, reverse=True)
    if cle in CLES_TRI_TEXTE:
        return sorted(cours, key=lambda c: (getattr(c, cle) or '').casefold())
    raise ValueError(f"Clé de tri inconnue: {cle}")


def paginer(elements, page=1, taille=20):
    elements = list(elements)
    taille = max(1, int(taille))
    total = len(elements)
    nombre_pages = max(1, math.ceil(total / taille))
    page = min(max(1, int(page)), nombre_pages)
    debut = (page - 1) * taille
    return {
        'resultats': elements[debut:debut + taille],
        'page': page,
        'nombre_pages': nombre_pages,
        'total': total,
    }


def annees_disponibles(cours):
    """Années académiques distinctes, de la plus récente à la plus ancienne"""
    return sorted({c.annee_academique for c in cours if c.annee_academique}, reverse=True)
