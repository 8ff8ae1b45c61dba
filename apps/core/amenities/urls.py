from django.urls import path
from rest_framework.routers import SimpleRouter

from .views import MyAmenityListView, StaffAmenityViewSet, StudentAmenityViewSet

router = SimpleRouter()
router.register('student-amenities', StudentAmenityViewSet, basename='student-amenity')
router.register('staff-amenities', StaffAmenityViewSet, basename='staff-amenity')

urlpatterns = [
    path('my/amenities/', MyAmenityListView.as_view(), name='my_amenities'),
] + router.urls
