# ia/serializers.py
from rest_framework import serializers


class DescriptionChapitreSerializer(serializers.Serializer):
    titre = serializers.CharField(max_length=200)
    nom_cours = serializers.CharField(max_length=200)
    professeur = serializers.CharField(max_length=150, required=False, allow_blank=True, default='')


class DescriptionSerieSerializer(serializers.Serializer):
    titre = serializers.CharField(max_length=255)
    type = serializers.ChoiceField(choices=['TD', 'TP', 'Exam'])
    nom_cours = serializers.CharField(max_length=200)
