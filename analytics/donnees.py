# analytics/donnees.py
"""
Vue d'ensemble des collections pour le back-office : lecture brute,
recherche plein texte, tri générique.
"""
import json
from datetime import date, datetime, timezone as dt_timezone
from decimal import Decimal
from functools import cmp_to_key

from django.core.serializers.json import DjangoJSONEncoder
from django.utils.dateparse import parse_date, parse_datetime


def _onglets():
    from cours.models import Cours, Chapitre
    from examens.models import Serie
    from paiements.models import Paiement
    from utilisateurs.models import Utilisateur

    return {
        'cours': {'modele': Cours, 'tri': 'code', 'exclus': []},
        'chapitres': {'modele': Chapitre, 'tri': 'numero', 'exclus': []},
        'series': {'modele': Serie, 'tri': 'numero_sequence', 'exclus': []},
        'utilisateurs': {'modele': Utilisateur, 'tri': 'id', 'exclus': ['password']},
        'paiements': {'modele': Paiement, 'tri': 'id', 'exclus': []},
    }


ONGLETS = ('cours', 'chapitres', 'series', 'utilisateurs', 'paiements')


class OngletInconnu(Exception):
    pass


def configuration(onglet):
    try:
        return _onglets()[onglet]
    except KeyError:
        raise OngletInconnu(f"Onglet inconnu: {onglet}")


def tri_par_defaut(onglet):
    return configuration(onglet)['tri']


def lignes(onglet):
    """Enregistrements de la collection, un dict par ligne"""
    config = configuration(onglet)
    champs = [
        f.attname for f in config['modele']._meta.concrete_fields
        if f.attname not in config['exclus']
    ]
    return list(config['modele'].objects.order_by('pk').values(*champs))


def rechercher(lignes, terme):
    """Garde les lignes dont la représentation JSON contient le terme (insensible à la casse)"""
    if not terme:
        return list(lignes)
    terme = terme.lower()
    return [
        ligne for ligne in lignes
        if terme in json.dumps(ligne, cls=DjangoJSONEncoder, ensure_ascii=False).lower()
    ]


def _est_nombre(valeur):
    return isinstance(valeur, (int, float, Decimal)) and not isinstance(valeur, bool)


def _horodatage(valeur):
    """Horodatage d'une date, d'un datetime ou d'une chaîne ISO ; None sinon"""
    if isinstance(valeur, str):
        valeur = parse_datetime(valeur) or parse_date(valeur)
    if isinstance(valeur, datetime):
        if valeur.tzinfo is None:
            valeur = valeur.replace(tzinfo=dt_timezone.utc)
        return valeur.timestamp()
    if isinstance(valeur, date):
        return datetime(valeur.year, valeur.month, valeur.day, tzinfo=dt_timezone.utc).timestamp()
    return None


def comparer(a, b):
    if a is None and b is None:
        return 0
    if a is None:
        return -1
    if b is None:
        return 1
    if _est_nombre(a) and _est_nombre(b):
        return (a > b) - (a < b)
    try:
        ha, hb = _horodatage(a), _horodatage(b)
    except ValueError:
        ha = hb = None
    if ha is not None and hb is not None:
        return (ha > hb) - (ha < hb)
    sa, sb = str(a).casefold(), str(b).casefold()
    return (sa > sb) - (sa < sb)


def trier(lignes, cle, ordre='asc'):
    """
    Tri stable sur `cle` : valeurs nulles en premier, nombres, dates puis texte.
    L'ordre descendant renverse le tri ascendant.
    """
    if not cle:
        return list(lignes)
    resultat = sorted(lignes, key=cmp_to_key(lambda x, y: comparer(x.get(cle), y.get(cle))))
    if ordre == 'desc':
        resultat.reverse()
    return resultat
