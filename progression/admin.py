# progression/admin.py
from django.contrib import admin
from .models import DonneeLocale


def remettre_a_zero(modeladmin, request, queryset):
    """Supprime les données locales sélectionnées"""
    nombre = queryset.count()
    queryset.delete()
    modeladmin.message_user(request, f"{nombre} donnée(s) supprimée(s).")
remettre_a_zero.short_description = "Remettre à zéro"


@admin.register(DonneeLocale)
class DonneeLocaleAdmin(admin.ModelAdmin):
    list_display = ('utilisateur', 'cle', 'version', 'date_modification')
    list_filter = ('cle', 'version')
    search_fields = ('utilisateur__email', 'cle')
    readonly_fields = ('date_modification',)
    actions = [remettre_a_zero]
