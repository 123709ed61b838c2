# paiements/admin.py
from django.contrib import admin
from .models import Paiement


def marquer_payes(modeladmin, request, queryset):
    for paiement in queryset.exclude(statut='paye'):
        paiement.marquer_paye()
marquer_payes.short_description = "Marquer comme payés"


@admin.register(Paiement)
class PaiementAdmin(admin.ModelAdmin):
    list_display = ('nom', 'matricule', 'departement', 'montant', 'date_echeance', 'statut', 'date_paiement')
    list_filter = ('statut', 'departement', 'date_echeance')
    search_fields = ('nom', 'matricule', 'utilisateur__email')
    readonly_fields = ('date_paiement', 'date_creation', 'date_mise_a_jour')
    actions = [marquer_payes]
