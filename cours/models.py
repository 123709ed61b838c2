# cours/models.py
import re

from django.conf import settings
from django.core.validators import RegexValidator, MinValueValidator
from django.db import models

PLAGE_ANNEES = re.compile(r'(\d{4}-\d{4})')

valider_annee_academique = RegexValidator(
    regex=r'^\d{4}-\d{4}$',
    message="L'année académique doit être au format AAAA-AAAA"
)


def normaliser_titre_chapitre(titre):
    """Remplace '_' et '-' par des espaces, sauf dans les plages d'années (2023-2024)"""
    morceaux = PLAGE_ANNEES.split(titre or '')
    return ''.join(
        morceau if PLAGE_ANNEES.fullmatch(morceau) else re.sub(r'[_-]', ' ', morceau)
        for morceau in morceaux
    ).strip()


class Cours(models.Model):
    """Cours du catalogue, visible par tous les étudiants"""
    TYPE_CHOICES = [
        ('obligatoire', 'Obligatoire'),
        ('optionnel', 'Optionnel'),
    ]

    STATUT_CHOICES = [
        ('actif', 'Actif'),
        ('termine', 'Terminé'),
        ('a_venir', 'À venir'),
    ]

    NIVEAU_CHOICES = [
        ('L1', 'Licence 1'),
        ('L2', 'Licence 2'),
        ('L3', 'Licence 3'),
        ('M1', 'Master 1'),
        ('M2', 'Master 2'),
    ]

    SEMESTRE_CHOICES = [
        (1, 'Semestre 1'),
        (2, 'Semestre 2'),
    ]

    LANGUE_CHOICES = [
        ('fr', 'Français'),
        ('en', 'English'),
    ]

    code = models.CharField(max_length=20)
    nom = models.CharField(max_length=200)
    professeur = models.CharField(max_length=150, blank=True)
    credits = models.PositiveIntegerField(default=0)
    type = models.CharField(max_length=20, choices=TYPE_CHOICES, default='obligatoire')
    statut = models.CharField(max_length=20, choices=STATUT_CHOICES, default='actif')
    niveau = models.CharField(max_length=2, choices=NIVEAU_CHOICES, default='L1')
    semestre = models.PositiveSmallIntegerField(choices=SEMESTRE_CHOICES, default=1)
    annee_academique = models.CharField(max_length=9, validators=[valider_annee_academique])
    langue = models.CharField(max_length=2, choices=LANGUE_CHOICES, default='fr')
    couleur = models.CharField(max_length=7, default='#3B82F6')
    icone = models.CharField(max_length=50, blank=True)
    proprietaire = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL,
        null=True, blank=True, related_name='cours'
    )

    # Sections affichées sur la page du cours
    a_cours = models.BooleanField(default=True)
    a_td = models.BooleanField(default=False)
    a_tp = models.BooleanField(default=False)
    a_examen = models.BooleanField(default=False)

    date_creation = models.DateTimeField(auto_now_add=True)
    date_modification = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['code']
        verbose_name_plural = 'Cours'

    def __str__(self):
        return f"{self.code} - {self.nom}"

    @property
    def sections_visibles(self):
        return {
            'cours': self.a_cours,
            'td': self.a_td,
            'tp': self.a_tp,
            'examen': self.a_examen,
        }


class Chapitre(models.Model):
    """Chapitres (ou livres) rattachés à un cours"""
    TYPE_RESSOURCE_CHOICES = [
        ('chapitre', 'Chapitre'),
        ('livre', 'Livre'),
    ]

    cours = models.ForeignKey(Cours, on_delete=models.CASCADE, related_name='chapitres')
    numero = models.PositiveIntegerField(null=True, blank=True, validators=[MinValueValidator(1)])
    titre = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    url_document = models.URLField(max_length=500, blank=True)
    date = models.DateField(null=True, blank=True)
    annee_academique = models.CharField(max_length=9, blank=True)
    type_ressource = models.CharField(max_length=20, choices=TYPE_RESSOURCE_CHOICES, default='chapitre')
    date_creation = models.DateTimeField(auto_now_add=True)
    date_modification = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['cours', 'numero']

    def __str__(self):
        return f"Ch.{self.numero} - {self.titre}"

    def save(self, *args, **kwargs):
        self.titre = normaliser_titre_chapitre(self.titre)
        if not self.annee_academique and self.cours_id:
            self.annee_academique = self.cours.annee_academique
        super().save(*args, **kwargs)


class Compteur(models.Model):
    """Compteur partagé : `valeur` est la dernière valeur attribuée"""
    cle = models.CharField(max_length=100, unique=True)
    valeur = models.IntegerField()
    date_modification = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.cle} = {self.valeur}"
