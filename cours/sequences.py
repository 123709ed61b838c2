# cours/sequences.py
import logging

from django.db import transaction, DatabaseError

from .models import Compteur

logger = logging.getLogger(__name__)

PREMIER_NUMERO = 1
PREMIER_CODE = 100


class ErreurSequence(Exception):
    """La transaction sur le compteur a échoué ; l'utilisateur peut réessayer"""


def prochaine_sequence(cle, premier=PREMIER_NUMERO):
    """
    Lecture-modification-écriture atomique du compteur `cle`.
    Renvoie `premier` si le compteur n'existe pas encore, sinon valeur + 1.
    Une seule tentative : tout échec lève ErreurSequence.
    """
    try:
        with transaction.atomic():
            compteur = Compteur.objects.select_for_update().filter(cle=cle).first()
            if compteur is None:
                Compteur.objects.create(cle=cle, valeur=premier)
                return premier
            compteur.valeur += 1
            compteur.save(update_fields=['valeur', 'date_modification'])
            return compteur.valeur
    except DatabaseError as e:
        logger.error(f"Échec de la séquence {cle}: {e}")
        raise ErreurSequence(str(e)) from e


def prochain_numero_chapitre(cours_id):
    return prochaine_sequence(f"chapitre:{cours_id}")


def prochain_numero_serie(cours_id, type_serie):
    """Numérotation indépendante des TD et des TP d'un cours"""
    return prochaine_sequence(f"{type_serie.lower()}:{cours_id}")


def prochain_code_cours(prefixe):
    prefixe = (prefixe or '').strip().upper()
    if not prefixe:
        raise ValueError("Le préfixe du code est requis")
    numero = prochaine_sequence(f"code:{prefixe}", premier=PREMIER_CODE)
    return f"{prefixe}{numero}"
