# progression/serializers.py
from rest_framework import serializers

from progression.calcul import CATEGORIES, ids_valides, enregistrement_valide
from progression.models import DonneeLocale
from progression.stockage import VERSION_SCHEMA, CLE_FAVORIS, CLE_PROGRESSION


class MarquerVuSerializer(serializers.Serializer):
    categorie = serializers.ChoiceField(choices=CATEGORIES)
    element_id = serializers.CharField(max_length=64)


class DonneeLocaleSerializer(serializers.ModelSerializer):
    """
    Valeur brute d'une clé du stockage.
    La forme des clés connues (favoris, progression) est vérifiée ; la clé
    est transmise dans le contexte.
    """
    valeur = serializers.JSONField()
    version = serializers.IntegerField(min_value=0, max_value=VERSION_SCHEMA, required=False)

    class Meta:
        model = DonneeLocale
        fields = ['cle', 'valeur', 'version', 'date_modification']
        read_only_fields = ['cle', 'date_modification']

    def validate(self, data):
        cle = self.context.get('cle')
        valeur = data['valeur']
        version = data.get('version', VERSION_SCHEMA)

        if cle == CLE_FAVORIS and not ids_valides(valeur):
            raise serializers.ValidationError({'valeur': "Les favoris doivent être une liste d'identifiants"})

        if cle == CLE_PROGRESSION:
            if not isinstance(valeur, dict):
                raise serializers.ValidationError({'valeur': 'La progression doit être un objet par cours'})
            for cours_id, enregistrement in valeur.items():
                # Schéma v0 : seule la présence d'un objet par cours est vérifiée
                valide = isinstance(enregistrement, dict) if version < VERSION_SCHEMA else enregistrement_valide(enregistrement)
                if not valide:
                    raise serializers.ValidationError(
                        {'valeur': f'Progression invalide pour le cours {cours_id}'}
                    )
        return data
