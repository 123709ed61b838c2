# utilisateurs/permissions.py
from rest_framework import permissions


class EstAdministrateur(permissions.BasePermission):
    """
    Réservé aux comptes administrateurs (rôle admin ou superuser).
    """
    message = "Accès réservé aux administrateurs"

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.est_admin)


class EstAdministrateurOuLecture(permissions.BasePermission):
    """
    Lecture pour tout utilisateur connecté, écriture pour les administrateurs.
    """
    message = "Modification réservée aux administrateurs"

    def has_permission(self, request, view):
        user = request.user
        if not (user and user.is_authenticated):
            return False
        if request.method in permissions.SAFE_METHODS:
            return True
        return user.est_admin
