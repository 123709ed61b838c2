# utilisateurs/admin.py
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .models import Utilisateur


@admin.register(Utilisateur)
class UtilisateurAdmin(UserAdmin):
    list_display = ('email', 'nom_affichage', 'role', 'matricule', 'telephone', 'is_active', 'date_creation')
    list_filter = ('role', 'is_active', 'statut', 'date_creation')
    search_fields = ('email', 'nom_affichage', 'matricule', 'telephone')
    ordering = ('-date_creation',)
    readonly_fields = ('date_creation', 'date_modification', 'last_login')

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Informations personnelles', {'fields': ('nom_affichage', 'role', 'matricule', 'telephone', 'adresse', 'photo_url')}),
        ('Parcours', {'fields': ('filiere', 'mineure', 'annee', 'annee_inscription', 'moyenne', 'conseiller', 'statut', 'credits_obtenus')}),
        ('Paramètres compte', {'fields': ('is_active', 'is_staff', 'is_superuser')}),
        ('Dates importantes', {'fields': ('date_creation', 'date_modification', 'last_login')}),
        ('Permissions', {'fields': ('groups', 'user_permissions'), 'classes': ('collapse',)}),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'nom_affichage', 'role', 'matricule', 'password1', 'password2'),
        }),
    )
