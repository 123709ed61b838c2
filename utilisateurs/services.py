# utilisateurs/services.py
import logging

import requests
from django.conf import settings
from django.contrib.auth import authenticate
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.db import transaction
from rest_framework.authtoken.models import Token

from .erreurs import ErreurAuthentification
from .models import Utilisateur

logger = logging.getLogger(__name__)

LONGUEUR_MIN_RECHERCHE_ADRESSE = 3
NOMBRE_SUGGESTIONS_ADRESSE = 5


# ===============================
# AUTHENTIFICATION
# ===============================

def inscrire(email, mot_de_passe, nom_affichage, **profil):
    """Crée le compte et son profil, puis renvoie (utilisateur, token)"""
    if not email or not mot_de_passe:
        raise ErreurAuthentification('champs-manquants')

    email = email.strip().lower()
    try:
        validate_email(email)
    except ValidationError:
        raise ErreurAuthentification('email-invalide')

    if Utilisateur.objects.filter(email__iexact=email).exists():
        raise ErreurAuthentification('email-deja-utilise')

    try:
        validate_password(mot_de_passe, Utilisateur(email=email, nom_affichage=nom_affichage or ''))
    except ValidationError as e:
        raise ErreurAuthentification('mot-de-passe-faible', details=list(e.messages))

    with transaction.atomic():
        utilisateur = Utilisateur.objects.create_user(
            email=email,
            password=mot_de_passe,
            nom_affichage=nom_affichage or '',
            role=Utilisateur.ROLE_ETUDIANT,
            **profil
        )
        token = Token.objects.create(user=utilisateur)

    logger.info(f"Nouvel utilisateur inscrit: {utilisateur.email}")
    return utilisateur, token


def connecter(email, mot_de_passe):
    """Vérifie les identifiants et renvoie (utilisateur, token)"""
    if not email or not mot_de_passe:
        raise ErreurAuthentification('champs-manquants')

    utilisateur = authenticate(email=email.strip().lower(), password=mot_de_passe)
    if utilisateur is None:
        inactif = Utilisateur.objects.filter(email__iexact=email.strip(), is_active=False).exists()
        raise ErreurAuthentification('compte-desactive' if inactif else 'identifiants-invalides')

    token, created = Token.objects.get_or_create(user=utilisateur)
    return utilisateur, token


def deconnecter(utilisateur):
    Token.objects.filter(user=utilisateur).delete()


# ===============================
# DONNÉES UTILISATEUR
# ===============================

def vider_donnees_utilisateur(utilisateur):
    """
    Supprime le profil, les cours rattachés à l'utilisateur et ses paiements
    dans une seule transaction.
    """
    from cours.models import Cours
    from paiements.models import Paiement

    with transaction.atomic():
        nb_cours, _ = Cours.objects.filter(proprietaire=utilisateur).delete()
        nb_paiements, _ = Paiement.objects.filter(utilisateur=utilisateur).delete()
        email = utilisateur.email
        utilisateur.delete()

    logger.info(f"Données supprimées pour {email}: {nb_cours} cours, {nb_paiements} paiements")
    return {'cours': nb_cours, 'paiements': nb_paiements}


# ===============================
# GÉOCODAGE
# ===============================

def suggestions_adresse(requete):
    """
    Suggestions d'adresses via Nominatim (OpenStreetMap).
    Les requêtes trop courtes ne déclenchent aucun appel.
    """
    requete = (requete or '').strip()
    if len(requete) < LONGUEUR_MIN_RECHERCHE_ADRESSE:
        return []

    response = requests.get(
        settings.GEOCODAGE_URL,
        params={'format': 'json', 'q': requete, 'limit': NOMBRE_SUGGESTIONS_ADRESSE},
        headers={'User-Agent': settings.GEOCODAGE_USER_AGENT},
        timeout=8
    )
    response.raise_for_status()
    return [
        {
            'libelle': item.get('display_name'),
            'lat': item.get('lat'),
            'lon': item.get('lon'),
        }
        for item in response.json()
    ]
