from rest_framework import generics, viewsets
from rest_framework.permissions import IsAuthenticated

from apps.core.users.audit import log_audit_event
from apps.core.users.permissions import IsAdminRole, IsOccupantRole

from .models import Notice
from .serializers import NoticeSerializer
from .services import create_notice, notices_for_user, update_notice


class NoticeViewSet(viewsets.ModelViewSet):
    serializer_class = NoticeSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get_queryset(self):
        queryset = Notice.objects.select_related('block')
        params = self.request.query_params
        if params.get('hostel'):
            queryset = queryset.filter(hostel_id=params['hostel'])
        if params.get('target_type'):
            queryset = queryset.filter(target_type=params['target_type'])
        if params.get('status'):
            queryset = queryset.filter(status=params['status'])
        return queryset

    def perform_create(self, serializer):
        serializer.instance = create_notice(created_by=self.request.user, **serializer.validated_data)
        log_audit_event(
            self.request,
            'notice.created',
            target=serializer.instance,
            details=f"Target={serializer.instance.target_type}",
        )

    def perform_update(self, serializer):
        serializer.instance = update_notice(serializer.instance, **serializer.validated_data)
        log_audit_event(self.request, 'notice.updated', target=serializer.instance)

    def perform_destroy(self, instance):
        log_audit_event(self.request, 'notice.deleted', target=instance, details=f"Title={instance.title}")
        instance.delete()


class MyNoticeListView(generics.ListAPIView):
    serializer_class = NoticeSerializer
    permission_classes = [IsAuthenticated, IsOccupantRole]

    def get_queryset(self):
        return notices_for_user(self.request.user).select_related('block')
