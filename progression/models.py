# progression/models.py
from django.db import models
from utilisateurs.models import Utilisateur


class DonneeLocale(models.Model):
    """
    Petit stockage clé/valeur JSON par utilisateur (favoris, progression des
    cours). `version` est la version du schéma de `valeur`.
    """
    utilisateur = models.ForeignKey(Utilisateur, on_delete=models.CASCADE, related_name='donnees_locales')
    cle = models.CharField(max_length=100)
    valeur = models.JSONField(default=dict)
    version = models.PositiveIntegerField(default=0)
    date_modification = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = ['utilisateur', 'cle']
        verbose_name = "Donnée locale"
        verbose_name_plural = "Données locales"

    def __str__(self):
        return f"{self.utilisateur.email} - {self.cle} (v{self.version})"
