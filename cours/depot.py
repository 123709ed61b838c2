# cours/depot.py
"""
Dépôt générique : les mêmes opérations d'accès aux données pour chaque
type d'enregistrement (cours, chapitres, séries, paiements...).
"""
import logging

from django.db import transaction

logger = logging.getLogger(__name__)


class Depot:
    def __init__(self, modele, champ_parent=None):
        self.modele = modele
        self.champ_parent = champ_parent

    def get(self, pk):
        """Renvoie l'enregistrement ou None"""
        return self.modele.objects.filter(pk=pk).first()

    def get_all(self):
        return self.modele.objects.all()

    def get_par_parent(self, parent_id):
        if not self.champ_parent:
            raise ValueError(f"{self.modele.__name__} n'a pas de parent")
        return self.modele.objects.filter(**{f"{self.champ_parent}_id": parent_id})

    def create(self, **champs):
        return self.modele.objects.create(**champs)

    def update(self, pk, **champs):
        """Mise à jour partielle ; renvoie l'enregistrement modifié"""
        instance = self.modele.objects.get(pk=pk)
        for champ, valeur in champs.items():
            setattr(instance, champ, valeur)
        instance.save()
        return instance

    def delete(self, pk):
        supprimes, _ = self.modele.objects.filter(pk=pk).delete()
        return supprimes > 0

    def vider(self):
        """Supprime tous les enregistrements de la collection"""
        with transaction.atomic():
            nombre = self.modele.objects.count()
            self.modele.objects.all().delete()
        logger.info(f"{nombre} enregistrements {self.modele.__name__} supprimés")
        return nombre
