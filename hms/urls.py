from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),

    path('api/auth/', include('apps.core.users.urls')),
    path('api/', include('apps.core.hostels.urls')),
    path('api/', include('apps.core.students.urls')),
    path('api/', include('apps.core.staff.urls')),
    path('api/finance/', include('apps.core.finance.urls')),
    path('api/', include('apps.core.attendance.urls')),
    path('api/', include('apps.core.complaints.urls')),
    path('api/', include('apps.core.notices.urls')),
    path('api/', include('apps.core.amenities.urls')),
    path('api/', include('apps.core.inquiries.urls')),
    path('api/dashboard/', include('apps.core.dashboard.urls')),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
