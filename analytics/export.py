# analytics/export.py
import csv
import io
from datetime import date, datetime


def _texte(valeur):
    if valeur is None:
        return ''
    if isinstance(valeur, (datetime, date)):
        return valeur.isoformat()
    return str(valeur)


def exporter_csv(lignes):
    """
    En-tête (noms de colonnes) puis une ligne par enregistrement, chaque
    valeur entre guillemets. Aucune ligne : contenu vide.
    """
    if not lignes:
        return ''
    colonnes = list(lignes[0].keys())
    tampon = io.StringIO()
    tampon.write(','.join(colonnes) + '\n')
    writer = csv.writer(tampon, quoting=csv.QUOTE_ALL, lineterminator='\n')
    for ligne in lignes:
        writer.writerow([_texte(ligne.get(colonne)) for colonne in colonnes])
    return tampon.getvalue()


def nom_fichier(onglet, page=None):
    if page is None:
        return f"{onglet}_all.csv"
    return f"{onglet}_page{page}.csv"
