# utilisateurs/serializers.py
from rest_framework import serializers

from .models import Utilisateur

CHAMPS_PROFIL = [
    'matricule', 'telephone', 'adresse', 'photo_url', 'filiere', 'mineure',
    'annee', 'annee_inscription', 'moyenne', 'conseiller', 'statut', 'credits_obtenus',
]


class UtilisateurSerializer(serializers.ModelSerializer):
    """Profil complet, tel que lu par l'application et le back-office"""

    class Meta:
        model = Utilisateur
        fields = ['id', 'email', 'nom_affichage', 'role'] + CHAMPS_PROFIL + [
            'date_creation', 'date_modification'
        ]
        read_only_fields = ['id', 'date_creation', 'date_modification']


class ProfilSerializer(UtilisateurSerializer):
    """Profil modifiable par son propriétaire (ni email ni rôle)"""

    class Meta(UtilisateurSerializer.Meta):
        read_only_fields = UtilisateurSerializer.Meta.read_only_fields + ['email', 'role']


class InscriptionSerializer(serializers.Serializer):
    email = serializers.CharField(max_length=254, required=False, allow_blank=True)
    mot_de_passe = serializers.CharField(write_only=True, required=False, allow_blank=True)
    nom_affichage = serializers.CharField(max_length=150, required=False, allow_blank=True)
    matricule = serializers.CharField(max_length=30, required=False, allow_blank=True)
    telephone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    adresse = serializers.CharField(max_length=255, required=False, allow_blank=True)
    filiere = serializers.CharField(max_length=100, required=False, allow_blank=True)
    annee = serializers.CharField(max_length=20, required=False, allow_blank=True)
