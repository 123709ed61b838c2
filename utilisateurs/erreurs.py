# utilisateurs/erreurs.py
from rest_framework import status

MESSAGES_ERREURS_AUTH = {
    'email-deja-utilise': "Cette adresse email est déjà utilisée",
    'mot-de-passe-faible': "Le mot de passe est trop faible (6 caractères minimum)",
    'email-invalide': "Adresse email invalide",
    'champs-manquants': "Email et mot de passe requis",
    'identifiants-invalides': "Email ou mot de passe incorrect",
    'compte-desactive': "Ce compte est désactivé",
}

STATUTS_ERREURS_AUTH = {
    'identifiants-invalides': status.HTTP_401_UNAUTHORIZED,
    'compte-desactive': status.HTTP_403_FORBIDDEN,
}


class ErreurAuthentification(Exception):
    """Erreur d'inscription/connexion identifiée par un code stable"""

    def __init__(self, code, details=None):
        self.code = code
        self.details = details or []
        super().__init__(message_pour(code))

    @property
    def statut_http(self):
        return STATUTS_ERREURS_AUTH.get(self.code, status.HTTP_400_BAD_REQUEST)

    def en_reponse(self):
        data = {'code': self.code, 'error': str(self)}
        if self.details:
            data['details'] = self.details
        return data


def message_pour(code):
    return MESSAGES_ERREURS_AUTH.get(code, "Erreur d'authentification")
