# utilisateurs/contexte.py
import logging

from django.db import DatabaseError

logger = logging.getLogger(__name__)


class ContexteAuth:
    """
    État de session explicite : utilisateur courant, profil chargé et
    indicateur de chargement. Il n'est modifié que par `sur_changement`,
    l'unique rappel branché sur la source d'authentification.
    """

    def __init__(self, charger_profil):
        self._charger_profil = charger_profil
        self.utilisateur = None
        self.profil = None
        self.chargement = True
        self.ferme = False

    def sur_changement(self, utilisateur):
        if self.ferme:
            return
        self.utilisateur = utilisateur
        if utilisateur is None:
            self.profil = None
        else:
            try:
                self.profil = self._charger_profil(utilisateur)
            except DatabaseError as e:
                # Profil vide plutôt qu'un écran bloqué
                logger.warning(f"Lecture du profil impossible pour {utilisateur}: {e}")
                self.profil = {}
        self.chargement = False

    def fermer(self):
        self.utilisateur = None
        self.profil = None
        self.ferme = True

    @property
    def est_authentifie(self):
        return self.utilisateur is not None

    @property
    def est_admin(self):
        if self.utilisateur is None:
            return False
        if getattr(self.utilisateur, 'is_superuser', False):
            return True
        return bool(self.profil) and self.profil.get('role') == 'admin'

    def instantane(self):
        return {
            'utilisateur': getattr(self.utilisateur, 'email', None),
            'profil': self.profil,
            'chargement': self.chargement,
            'est_authentifie': self.est_authentifie,
            'est_admin': self.est_admin,
        }


def contexte_pour_requete(request):
    """Construit le contexte d'une requête DRF déjà authentifiée"""
    from .serializers import UtilisateurSerializer

    contexte = ContexteAuth(lambda u: UtilisateurSerializer(u).data)
    utilisateur = request.user if request.user and request.user.is_authenticated else None
    contexte.sur_changement(utilisateur)
    return contexte
