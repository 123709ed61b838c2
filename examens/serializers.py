# examens/serializers.py
from rest_framework import serializers
from examens.models import Serie, ParametresExamen
from examens.titres import generer_titre, formater_titre

MODE_AUTO = 'auto'
MODE_MANUEL = 'manuel'


class SerieSerializer(serializers.ModelSerializer):
    """
    Serializer pour les séries (TD, TP, examens).
    En mode `auto`, le titre est généré à partir du type, de la langue,
    du numéro, du chapitre et de l'année.
    """
    cours_code = serializers.CharField(source='cours.code', read_only=True)
    professeur = serializers.CharField(source='cours.professeur', read_only=True)
    mode_titre = serializers.ChoiceField(
        choices=[MODE_AUTO, MODE_MANUEL], default=MODE_MANUEL, write_only=True
    )

    class Meta:
        model = Serie
        fields = [
            'id', 'cours', 'cours_code', 'professeur', 'type', 'titre', 'mode_titre',
            'description', 'url_document', 'url_solution', 'a_solution', 'date',
            'annee_academique', 'numero_sequence', 'langue', 'numero_serie',
            'titre_chapitre', 'type_examen', 'date_creation', 'date_modification'
        ]
        read_only_fields = ['numero_sequence', 'date_creation', 'date_modification']
        extra_kwargs = {
            'titre': {'required': False, 'allow_blank': True},
        }

    def validate(self, attrs):
        mode = attrs.get('mode_titre', MODE_MANUEL)
        titre = attrs.get('titre', getattr(self.instance, 'titre', ''))
        if mode == MODE_MANUEL and not (titre or '').strip():
            raise serializers.ValidationError(
                {'titre': "Veuillez renseigner le titre en mode manuel."}
            )
        return attrs

    def _titre(self, validated_data):
        mode = validated_data.pop('mode_titre', MODE_MANUEL)
        if mode == MODE_AUTO:
            instance = self.instance

            def valeur(champ, defaut=None):
                if champ in validated_data:
                    return validated_data[champ]
                return getattr(instance, champ, defaut) if instance else defaut

            numero = valeur('numero_serie') or valeur('numero_sequence')
            validated_data['titre'] = generer_titre(
                valeur('type'),
                langue=valeur('langue', 'fr'),
                numero_serie=numero,
                titre_chapitre=valeur('titre_chapitre', ''),
                annee_academique=valeur('annee_academique', '') or getattr(valeur('cours'), 'annee_academique', ''),
                type_examen=valeur('type_examen') or 'Final',
            )
        if 'titre' in validated_data:
            validated_data['titre'] = formater_titre(validated_data['titre'])
        return validated_data

    def create(self, validated_data):
        return super().create(self._titre(validated_data))

    def update(self, instance, validated_data):
        return super().update(instance, self._titre(validated_data))


class ParametresExamenSerializer(serializers.ModelSerializer):
    class Meta:
        model = ParametresExamen
        fields = ['date_examen', 'actif', 'annee_academique', 'date_modification']
        read_only_fields = ['date_modification']
