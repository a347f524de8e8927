# stands/serializers.py

from rest_framework import serializers


class QRISSerializer(serializers.Serializer):
    stand_id = serializers.UUIDField()
    qris_code = serializers.CharField()
    store_name = serializers.CharField()
