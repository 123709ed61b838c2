# cours/documents.py
import re

MOTIF_CHEMIN = re.compile(r'/file/d/([^/?#]+)')
MOTIF_PARAMETRE = re.compile(r'[?&]id=([^&#]+)')

URL_APERCU = 'https://drive.google.com/file/d/{id}/preview?rm=minimal&embedded=true'


def url_apercu(url):
    """
    Convertit un lien de partage Drive en URL intégrable dans une iframe.
    Les URL non reconnues sont renvoyées telles quelles.
    """
    if not url:
        return url
    for motif in (MOTIF_CHEMIN, MOTIF_PARAMETRE):
        correspondance = motif.search(url)
        if correspondance:
            return URL_APERCU.format(id=correspondance.group(1))
    return url
