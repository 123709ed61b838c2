# paiements/serializers.py
from rest_framework import serializers
from .models import Paiement


class PaiementSerializer(serializers.ModelSerializer):
    statut_display = serializers.CharField(source='get_statut_display', read_only=True)
    utilisateur_email = serializers.CharField(source='utilisateur.email', read_only=True, default=None)

    class Meta:
        model = Paiement
        fields = [
            'id', 'utilisateur', 'utilisateur_email', 'nom', 'matricule', 'departement',
            'montant', 'date_echeance', 'statut', 'statut_display', 'date_paiement',
            'date_creation', 'date_mise_a_jour'
        ]
        read_only_fields = ['date_paiement', 'date_creation', 'date_mise_a_jour']

    def validate_montant(self, value):
        if value < 0:
            raise serializers.ValidationError("Le montant ne peut pas être négatif.")
        return value
