# examens/admin.py
from django.contrib import admin
from .models import Serie, ParametresExamen


def marquer_avec_solution(modeladmin, request, queryset):
    queryset.update(a_solution=True)
marquer_avec_solution.short_description = "Marquer les séries sélectionnées avec solution"


@admin.register(Serie)
class SerieAdmin(admin.ModelAdmin):
    list_display = ('titre', 'cours', 'type', 'numero_sequence', 'a_solution', 'annee_academique', 'date')
    list_filter = ('type', 'a_solution', 'langue', 'cours__niveau', 'cours')
    search_fields = ('titre', 'description', 'cours__code', 'cours__professeur')
    readonly_fields = ('numero_sequence', 'date_creation', 'date_modification')
    ordering = ('titre',)
    actions = [marquer_avec_solution]

    fieldsets = (
        ('Informations générales', {
            'fields': ('cours', 'type', 'titre', 'description', 'date', 'annee_academique')
        }),
        ('Documents', {
            'fields': ('url_document', 'url_solution', 'a_solution')
        }),
        ('Génération du titre', {
            'fields': ('langue', 'numero_serie', 'titre_chapitre', 'type_examen', 'numero_sequence'),
            'classes': ('collapse',)
        }),
    )

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('cours')


@admin.register(ParametresExamen)
class ParametresExamenAdmin(admin.ModelAdmin):
    list_display = ('annee_academique', 'date_examen', 'actif', 'date_modification')
    list_editable = ('actif',)
    readonly_fields = ('date_modification',)
