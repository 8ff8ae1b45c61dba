from django.urls import path
from rest_framework.routers import SimpleRouter

from .views import StaffProfileView, StaffViewSet

router = SimpleRouter()
router.register('staff', StaffViewSet, basename='staff')

urlpatterns = [
    path('staff/me/', StaffProfileView.as_view(), name='staff_me'),
] + router.urls
