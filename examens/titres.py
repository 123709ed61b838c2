# examens/titres.py
import re

SEPARATEUR = ' : '

PREFIXES_ANGLAIS = {
    'TD': 'TW',
    'TP': 'PW',
}


def _prefixe(type_serie, langue):
    if langue == 'en':
        return PREFIXES_ANGLAIS.get(type_serie, type_serie)
    return type_serie


def generer_titre(type_serie, langue='fr', numero_serie=None, titre_chapitre='',
                  annee_academique='', type_examen='Final'):
    """
    Titre automatique d'une série.
    TD/TP : "TD1 : Logique : 2023-2024" (TW/PW en anglais), chapitre et année optionnels.
    Examen : "Examen_Final_2023-2024" ou "Exam_TW_2023-2024".
    """
    annee = (annee_academique or '').strip()

    if type_serie == 'Exam':
        prefixe_examen = 'Examen' if langue == 'fr' else 'Exam'
        return f"{prefixe_examen}_{_prefixe(type_examen, langue)}_{annee}"

    numero = '' if numero_serie is None else numero_serie
    parties = [f"{_prefixe(type_serie, langue)}{numero}"]
    if (titre_chapitre or '').strip():
        parties.append(titre_chapitre.strip())
    if annee:
        parties.append(annee)
    return SEPARATEUR.join(parties)


def formater_titre(titre):
    return re.sub(r'[_-]', ' ', titre or '')


def annee_depuis_debut(annee_debut):
    """2023 -> '2023-2024'"""
    annee_debut = int(annee_debut)
    return f"{annee_debut}-{annee_debut + 1}"
