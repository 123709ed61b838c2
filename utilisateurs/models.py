from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin, BaseUserManager
from django.db import models
from django.utils import timezone


class UtilisateurManager(BaseUserManager):
    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError('L\'email doit être défini')
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        extra_fields.setdefault('role', Utilisateur.ROLE_ETUDIANT)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('role', Utilisateur.ROLE_ADMIN)
        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')
        return self._create_user(email, password, **extra_fields)


class Utilisateur(AbstractBaseUser, PermissionsMixin):
    """Compte étudiant ou administrateur, avec son profil"""
    ROLE_ETUDIANT = 'etudiant'
    ROLE_ADMIN = 'admin'
    ROLE_CHOICES = [
        (ROLE_ETUDIANT, 'Étudiant'),
        (ROLE_ADMIN, 'Administrateur'),
    ]
    STATUT_CHOICES = [
        ('actif', 'Actif'),
        ('inactif', 'Inactif'),
        ('diplome', 'Diplômé'),
    ]

    email = models.EmailField(unique=True)
    nom_affichage = models.CharField(max_length=150, blank=True)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_ETUDIANT)
    matricule = models.CharField(max_length=30, blank=True, help_text="Numéro d'étudiant")

    # Coordonnées
    telephone = models.CharField(max_length=20, blank=True)
    adresse = models.CharField(max_length=255, blank=True)
    photo_url = models.URLField(blank=True)

    # Parcours
    filiere = models.CharField(max_length=100, blank=True)
    mineure = models.CharField(max_length=100, blank=True)
    annee = models.CharField(max_length=20, blank=True, help_text="Année d'étude en cours")
    annee_inscription = models.CharField(max_length=9, blank=True)
    moyenne = models.CharField(max_length=10, blank=True)
    conseiller = models.CharField(max_length=150, blank=True)
    statut = models.CharField(max_length=20, choices=STATUT_CHOICES, default='actif')
    credits_obtenus = models.PositiveIntegerField(default=0)

    # Champs requis pour AbstractBaseUser
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)
    date_creation = models.DateTimeField(default=timezone.now)
    date_modification = models.DateTimeField(auto_now=True)

    objects = UtilisateurManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        ordering = ['-date_creation']
        verbose_name = "Utilisateur"
        verbose_name_plural = "Utilisateurs"

    def __str__(self):
        return self.email

    @property
    def est_admin(self):
        return self.role == self.ROLE_ADMIN or self.is_superuser

    def get_full_name(self):
        """Retourne le nom affiché, ou l'email à défaut"""
        return self.nom_affichage or self.email

    def get_short_name(self):
        return self.nom_affichage.split(' ')[0] if self.nom_affichage else self.email
