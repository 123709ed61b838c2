# cours/serializers.py
from rest_framework import serializers
from cours.models import Cours, Chapitre


class CoursSerializer(serializers.ModelSerializer):
    """Serializer pour les cours"""
    sections_visibles = serializers.ReadOnlyField()
    nombre_chapitres = serializers.SerializerMethodField()

    class Meta:
        model = Cours
        fields = [
            'id', 'code', 'nom', 'professeur', 'credits', 'type', 'statut',
            'niveau', 'semestre', 'annee_academique', 'langue', 'couleur', 'icone',
            'proprietaire', 'a_cours', 'a_td', 'a_tp', 'a_examen', 'sections_visibles',
            'nombre_chapitres', 'date_creation', 'date_modification'
        ]
        read_only_fields = ['proprietaire', 'date_creation', 'date_modification']

    def get_nombre_chapitres(self, obj):
        return obj.chapitres.count()


class CoursTableauSerializer(CoursSerializer):
    """Cours avec la progression et le favori de l'étudiant (tableau de bord)"""
    progression = serializers.SerializerMethodField()
    est_favori = serializers.SerializerMethodField()

    class Meta(CoursSerializer.Meta):
        fields = CoursSerializer.Meta.fields + ['progression', 'est_favori']

    def get_progression(self, obj):
        return self.context.get('pourcentages', {}).get(str(obj.pk), 0)

    def get_est_favori(self, obj):
        return str(obj.pk) in self.context.get('favoris', set())


class ChapitreSerializer(serializers.ModelSerializer):
    """Serializer pour les chapitres ; le numéro est attribué s'il est absent"""
    cours_code = serializers.CharField(source='cours.code', read_only=True)
    cours_nom = serializers.CharField(source='cours.nom', read_only=True)

    class Meta:
        model = Chapitre
        fields = [
            'id', 'cours', 'cours_code', 'cours_nom', 'numero', 'titre', 'description',
            'url_document', 'date', 'annee_academique', 'type_ressource',
            'date_creation', 'date_modification'
        ]
        read_only_fields = ['date_creation', 'date_modification']
        extra_kwargs = {
            'numero': {'required': False},
            'annee_academique': {'required': False},
        }

    def validate_titre(self, value):
        if not value.strip():
            raise serializers.ValidationError("Le titre est requis.")
        return value
