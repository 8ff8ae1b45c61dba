from django.urls import path
from rest_framework.routers import SimpleRouter

from .views import StudentProfileView, StudentViewSet

router = SimpleRouter()
router.register('students', StudentViewSet, basename='student')

urlpatterns = [
    path('students/me/', StudentProfileView.as_view(), name='student_me'),
] + router.urls
