# ia/services.py
import httpx
import ollama
from django.conf import settings
import logging

# Configurer le logger
logger = logging.getLogger(__name__)

CLE_EXEMPLE = 'your_api_key_here'

MESSAGE_NON_CONFIGUREE = (
    "Clé d'API IA non configurée. Ajoutez IA_API_KEY dans le fichier .env "
    "(clé disponible sur https://ollama.com/settings/keys)."
)

LIBELLES_TYPES = {
    'TD': 'Travaux Dirigés (Tutorial/Exercise)',
    'TP': 'Travaux Pratiques (Practical Lab Work)',
    'Exam': 'Exam',
}


class IANonConfiguree(Exception):
    pass


class ErreurIA(Exception):
    pass


def _client():
    cle = settings.IA_API_KEY
    if not cle or cle == CLE_EXEMPLE:
        raise IANonConfiguree(MESSAGE_NON_CONFIGUREE)
    return ollama.Client(host=settings.IA_HOTE, headers={'Authorization': f'Bearer {cle}'})


def _generer(prompt):
    client = _client()
    logger.debug(f"Prompt envoyé à l'IA: {prompt}")
    try:
        response = client.chat(
            model=settings.IA_MODELE,
            messages=[{"role": "user", "content": prompt}],
            options={"temperature": 0.3, "top_p": 0.8}
        )
    except (ollama.ResponseError, httpx.HTTPError, ConnectionError) as e:
        logger.error(f"Erreur lors de l'appel à l'IA: {str(e)}")
        raise ErreurIA(f"Erreur lors de la communication avec l'IA: {str(e)}") from e

    texte = (response["message"]["content"] or '').strip()
    if not texte:
        raise ErreurIA("Aucune description générée")
    return texte


def generer_description_chapitre(titre, nom_cours, professeur):
    """Description de 2-3 phrases d'un chapitre"""
    prompt = f"""You are an academic assistant helping to write course material descriptions.

Course: {nom_cours}
Professor: {professeur}
Chapter Title: {titre}

Write a clear, concise, and academic description (2-3 sentences, max 150 words) for this chapter that explains what students will learn. Focus on key concepts and learning objectives. Write in French if the course is in French, otherwise in English.

Description:"""
    return _generer(prompt)


def generer_description_serie(titre, type_serie, nom_cours):
    """Description de 1-2 phrases d'un TD, d'un TP ou d'un examen"""
    libelle = LIBELLES_TYPES.get(type_serie, type_serie)
    prompt = f"""You are an academic assistant helping to write course material descriptions.

Course: {nom_cours}
Type: {libelle}
Title: {titre}

Write a brief, clear description (1-2 sentences, max 100 words) for this {libelle} that explains what it covers. Write in French if the course is in French, otherwise in English.

Description:"""
    return _generer(prompt)
