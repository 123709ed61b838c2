# examens/models.py
from django.db import models
from django.utils import timezone

from cours.models import Cours


class Serie(models.Model):
    """Séries de TD, TP et sujets d'examen d'un cours"""
    TYPE_TD = 'TD'
    TYPE_TP = 'TP'
    TYPE_EXAMEN = 'Exam'

    TYPE_CHOICES = [
        (TYPE_TD, 'Travaux dirigés'),
        (TYPE_TP, 'Travaux pratiques'),
        (TYPE_EXAMEN, 'Examen'),
    ]

    TYPE_EXAMEN_CHOICES = [
        ('Final', 'Final'),
        ('TD', 'TD'),
        ('TP', 'TP'),
        ('Rattrapage', 'Rattrapage'),
        ('Devoir', 'Devoir'),
    ]

    LANGUE_CHOICES = [
        ('fr', 'Français'),
        ('en', 'English'),
    ]

    cours = models.ForeignKey(Cours, on_delete=models.CASCADE, related_name='series')
    type = models.CharField(max_length=4, choices=TYPE_CHOICES)
    titre = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    url_document = models.URLField(max_length=500, blank=True)
    url_solution = models.URLField(max_length=500, blank=True)
    a_solution = models.BooleanField(default=False)
    date = models.DateField(default=timezone.localdate)
    annee_academique = models.CharField(max_length=9, blank=True)
    numero_sequence = models.PositiveIntegerField(null=True, blank=True)

    # Données de génération automatique du titre
    langue = models.CharField(max_length=2, choices=LANGUE_CHOICES, default='fr')
    numero_serie = models.PositiveIntegerField(null=True, blank=True)
    titre_chapitre = models.CharField(max_length=200, blank=True)
    type_examen = models.CharField(max_length=20, choices=TYPE_EXAMEN_CHOICES, blank=True)

    date_creation = models.DateTimeField(auto_now_add=True)
    date_modification = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['titre']

    def __str__(self):
        return f"{self.cours.code} - {self.titre}"

    def save(self, *args, **kwargs):
        if not self.annee_academique and self.cours_id:
            self.annee_academique = self.cours.annee_academique
        super().save(*args, **kwargs)


class ParametresExamen(models.Model):
    """Paramètres globaux : date d'examen qui déverrouille les solutions"""
    ANNEE_PAR_DEFAUT = '2025-2026'

    date_examen = models.DateTimeField(null=True, blank=True)
    actif = models.BooleanField(default=True)
    annee_academique = models.CharField(max_length=9, default=ANNEE_PAR_DEFAUT)
    date_modification = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Paramètres d'examen"
        verbose_name_plural = "Paramètres d'examen"

    def __str__(self):
        return f"Examens {self.annee_academique} ({'actif' if self.actif else 'inactif'})"

    @classmethod
    def get_parametres(cls):
        """Récupère les paramètres enregistrés, ou None"""
        return cls.objects.order_by('-date_modification').first()

    @classmethod
    def valeurs_par_defaut(cls):
        return {
            'date_examen': timezone.now(),
            'actif': True,
            'annee_academique': cls.ANNEE_PAR_DEFAUT,
        }
