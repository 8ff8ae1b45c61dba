from django.shortcuts import get_object_or_404
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.hostels.models import Hostel
from apps.core.users.permissions import IsAdminRole

from .services import admin_dashboard_summary


class DashboardSummaryView(APIView):
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get(self, request):
        hostel = None
        hostel_id = request.query_params.get('hostel')
        if hostel_id:
            hostel = get_object_or_404(Hostel, pk=hostel_id)
        return Response(admin_dashboard_summary(hostel))
