# paiements/models.py
from django.db import models
from django.utils import timezone
from utilisateurs.models import Utilisateur


class Paiement(models.Model):
    """Frais de scolarité et de laboratoire d'un étudiant"""
    STATUT_CHOICES = [
        ('paye', 'Payé'),
        ('en_attente', 'En attente'),
        ('en_retard', 'En retard'),
    ]

    utilisateur = models.ForeignKey(
        Utilisateur, on_delete=models.CASCADE, null=True, blank=True, related_name='paiements'
    )
    nom = models.CharField(max_length=150)
    matricule = models.CharField(max_length=30, blank=True)
    departement = models.CharField(max_length=100, blank=True)
    montant = models.DecimalField(max_digits=10, decimal_places=2)
    date_echeance = models.DateField()
    statut = models.CharField(max_length=20, choices=STATUT_CHOICES, default='en_attente')
    date_paiement = models.DateTimeField(null=True, blank=True)
    date_creation = models.DateTimeField(auto_now_add=True)
    date_mise_a_jour = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['date_echeance']
        verbose_name = "Paiement"
        verbose_name_plural = "Paiements"

    def __str__(self):
        return f"{self.nom} - {self.montant} ({self.get_statut_display()})"

    @property
    def est_paye(self):
        return self.statut == 'paye'

    def marquer_paye(self):
        self.statut = 'paye'
        self.date_paiement = timezone.now()
        self.save(update_fields=['statut', 'date_paiement', 'date_mise_a_jour'])
