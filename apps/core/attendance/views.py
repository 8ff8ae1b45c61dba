from django.http import HttpResponse
from django.shortcuts import get_object_or_404
from django.utils import timezone
from django.utils.dateparse import parse_date
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.staff.models import Staff
from apps.core.students.models import Student
from apps.core.users.audit import log_audit_event
from apps.core.users.permissions import IsAdminRole, IsOccupantRole

from .models import CheckInCheckOut, CheckoutFinancial, CheckoutRule
from .reports import LEDGER_HEADERS, ledger_rows, rows_to_csv_bytes, table_pdf_bytes
from .serializers import (
    CheckInCheckOutSerializer,
    CheckInSerializer,
    CheckoutFinancialSerializer,
    CheckoutRecordSerializer,
    CheckoutRequestSerializer,
    CheckoutRuleSerializer,
    ReviewSerializer,
)
from .services import (
    approve_checkout,
    check_in,
    create_checkout_rule,
    decline_checkout,
    events_for_day,
    finalize_checkout,
    occupant_for_user,
    preview_checkout_rules,
    record_checkout,
    request_checkout,
    toggle_checkout_rule,
    update_checkout_rule,
)

OCCUPANT_MODELS = {
    'student': Student,
    'staff': Staff,
}


def _finalized_payload(event, ledger_entry, request):
    return {
        'checkincheckout': CheckInCheckOutSerializer(event, context={'request': request}).data,
        'ledger_entry': (
            CheckoutFinancialSerializer(ledger_entry, context={'request': request}).data
            if ledger_entry is not None else None
        ),
    }


class CheckoutRuleViewSet(viewsets.ModelViewSet):
    serializer_class = CheckoutRuleSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get_queryset(self):
        queryset = CheckoutRule.objects.select_related('student', 'staff')
        student_id = self.request.query_params.get('student')
        staff_id = self.request.query_params.get('staff')
        if student_id:
            queryset = queryset.filter(student_id=student_id)
        if staff_id:
            queryset = queryset.filter(staff_id=staff_id)
        return queryset

    def perform_create(self, serializer):
        serializer.instance = create_checkout_rule(**serializer.validated_data)
        log_audit_event(
            self.request,
            'checkout_rule.created',
            target=serializer.instance,
            details=f"After={serializer.instance.active_after_days}; Percentage={serializer.instance.percentage}",
        )

    def perform_update(self, serializer):
        serializer.instance = update_checkout_rule(serializer.instance, **serializer.validated_data)
        log_audit_event(self.request, 'checkout_rule.updated', target=serializer.instance)

    def perform_destroy(self, instance):
        log_audit_event(self.request, 'checkout_rule.deleted', target=instance)
        instance.delete()

    @action(detail=True, methods=['post'])
    def toggle(self, request, pk=None):
        rule = toggle_checkout_rule(self.get_object())
        log_audit_event(request, 'checkout_rule.toggled', target=rule, details=f"Active={rule.is_active}")
        return Response(self.get_serializer(rule).data)

    @action(detail=False, methods=['get'], url_path=r'preview/(?P<occupant_type>student|staff)/(?P<occupant_id>\d+)')
    def preview(self, request, occupant_type=None, occupant_id=None):
        occupant = get_object_or_404(OCCUPANT_MODELS[occupant_type], pk=occupant_id)
        return Response(preview_checkout_rules(occupant))


class CheckInCheckOutViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = CheckInCheckOutSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get_queryset(self):
        queryset = CheckInCheckOut.objects.select_related('student', 'staff', 'block')
        params = self.request.query_params
        if params.get('status'):
            queryset = queryset.filter(status=params['status'])
        if params.get('student'):
            queryset = queryset.filter(student_id=params['student'])
        if params.get('staff'):
            queryset = queryset.filter(staff_id=params['staff'])
        if params.get('block'):
            queryset = queryset.filter(block_id=params['block'])
        if params.get('date'):
            queryset = queryset.filter(date=params['date'])
        return queryset

    def create(self, request, *args, **kwargs):
        payload = CheckoutRecordSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        data = dict(payload.validated_data)
        student = data.pop('student', None)
        staff = data.pop('staff', None)
        occupant = student or staff

        event, ledger_entry = record_checkout(occupant=occupant, recorded_by=request.user, **data)
        log_audit_event(request, 'checkout.recorded', target=event, details=f"Status={event.status}")
        return Response(_finalized_payload(event, ledger_entry, request), status=status.HTTP_201_CREATED)

    def _review(self, request, review):
        payload = ReviewSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        event = review(
            self.get_object(),
            reviewed_by=request.user,
            remarks=payload.validated_data.get('remarks'),
        )
        log_audit_event(request, f'checkout.{event.status}', target=event)
        return Response(self.get_serializer(event).data)

    @action(detail=True, methods=['post'])
    def approve(self, request, pk=None):
        return self._review(request, approve_checkout)

    @action(detail=True, methods=['post'])
    def decline(self, request, pk=None):
        return self._review(request, decline_checkout)

    @action(detail=True, methods=['post'])
    def finalize(self, request, pk=None):
        payload = CheckInSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        event, ledger_entry = finalize_checkout(
            self.get_object(),
            checkin_time=payload.validated_data.get('checkin_time'),
        )
        log_audit_event(
            request,
            'checkout.finalized',
            target=event,
            details=f"Days={event.checkout_duration}; Ledger={getattr(ledger_entry, 'pk', None)}",
        )
        return Response(_finalized_payload(event, ledger_entry, request))

    @action(detail=False, methods=['get'])
    def today(self, request):
        day = parse_date(request.query_params.get('date', '')) or timezone.localdate()
        events = events_for_day(day)
        return Response(self.get_serializer(events, many=True).data)


class CheckoutFinancialViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = CheckoutFinancialSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get_queryset(self):
        queryset = CheckoutFinancial.objects.select_related('student', 'staff', 'checkout')
        params = self.request.query_params
        if params.get('student'):
            queryset = queryset.filter(student_id=params['student'])
        if params.get('staff'):
            queryset = queryset.filter(staff_id=params['staff'])
        if params.get('date_from'):
            queryset = queryset.filter(created_at__date__gte=params['date_from'])
        if params.get('date_to'):
            queryset = queryset.filter(created_at__date__lte=params['date_to'])
        return queryset

    @action(detail=False, methods=['get'], url_path=r'export\.(?P<export_format>csv|pdf)')
    def export(self, request, export_format=None):
        entries = self.get_queryset()
        rows = ledger_rows(entries)
        filename_base = f'checkout_deductions_{timezone.localdate():%Y%m%d}'

        if export_format == 'csv':
            response = HttpResponse(rows_to_csv_bytes(LEDGER_HEADERS, rows), content_type='text/csv')
            response['Content-Disposition'] = f'attachment; filename="{filename_base}.csv"'
            return response

        total = sum(entry.deducted_amount for entry in entries)
        content = table_pdf_bytes(
            'Checkout Deductions',
            LEDGER_HEADERS,
            rows,
            footer=f'Total deducted: {total}',
        )
        response = HttpResponse(content, content_type='application/pdf')
        response['Content-Disposition'] = f'attachment; filename="{filename_base}.pdf"'
        return response


class MyCheckoutView(APIView):
    permission_classes = [IsAuthenticated, IsOccupantRole]

    def post(self, request):
        payload = CheckoutRequestSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        event = request_checkout(occupant=occupant_for_user(request.user), **payload.validated_data)
        log_audit_event(request, 'checkout.requested', target=event)
        return Response(CheckInCheckOutSerializer(event).data, status=status.HTTP_201_CREATED)


class MyCheckInView(APIView):
    permission_classes = [IsAuthenticated, IsOccupantRole]

    def post(self, request):
        payload = CheckInSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        event, ledger_entry = check_in(occupant=occupant_for_user(request.user), **payload.validated_data)
        log_audit_event(request, 'checkin.recorded', target=event)
        return Response(_finalized_payload(event, ledger_entry, request))


class MyCheckInCheckOutListView(APIView):
    permission_classes = [IsAuthenticated, IsOccupantRole]

    def get(self, request):
        occupant = occupant_for_user(request.user)
        events = CheckInCheckOut.objects.for_occupant(occupant).select_related('block')
        return Response(CheckInCheckOutSerializer(events, many=True).data)
