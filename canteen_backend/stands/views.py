# stands/views.py

from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from stands.serializers import QRISSerializer
from stands.services.qris import get_qris_for_stand


class StandQRISView(APIView):
    """
    GET /api/stands/<stand_id>/qris/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(responses=QRISSerializer)
    def get(self, request, stand_id):
        return Response(get_qris_for_stand(stand_id))
