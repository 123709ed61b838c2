# cours/admin.py
from django.contrib import admin
from .models import Cours, Chapitre, Compteur


class ChapitreInline(admin.TabularInline):
    model = Chapitre
    extra = 1
    fields = ('numero', 'titre', 'type_ressource', 'url_document', 'date')
    ordering = ('numero',)


@admin.register(Cours)
class CoursAdmin(admin.ModelAdmin):
    list_display = (
        'code', 'nom', 'professeur', 'credits', 'niveau', 'semestre',
        'annee_academique', 'statut', 'nombre_chapitres'
    )
    list_filter = ('niveau', 'semestre', 'statut', 'type', 'annee_academique', 'langue')
    search_fields = ('code', 'nom', 'professeur')
    list_editable = ('statut',)
    inlines = [ChapitreInline]
    ordering = ('code',)

    fieldsets = (
        ('Informations principales', {
            'fields': ('code', 'nom', 'professeur', 'credits', 'type', 'statut')
        }),
        ('Parcours', {
            'fields': ('niveau', 'semestre', 'annee_academique', 'langue')
        }),
        ('Affichage', {
            'fields': ('couleur', 'icone', 'a_cours', 'a_td', 'a_tp', 'a_examen')
        }),
        ('Propriétaire', {
            'fields': ('proprietaire',),
            'classes': ('collapse',)
        }),
    )

    def nombre_chapitres(self, obj):
        return obj.chapitres.count()
    nombre_chapitres.short_description = 'Chapitres'


@admin.register(Chapitre)
class ChapitreAdmin(admin.ModelAdmin):
    list_display = ('numero', 'titre', 'cours', 'type_ressource', 'annee_academique', 'date')
    list_filter = ('type_ressource', 'cours__niveau', 'cours')
    search_fields = ('titre', 'description', 'cours__code')
    ordering = ('cours', 'numero')

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('cours')


@admin.register(Compteur)
class CompteurAdmin(admin.ModelAdmin):
    list_display = ('cle', 'valeur', 'date_modification')
    search_fields = ('cle',)
    readonly_fields = ('date_modification',)
