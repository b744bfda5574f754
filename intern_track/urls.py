from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static
from django.http import JsonResponse
from django.utils import timezone

from internships.views import InternshipViewSet
from students.views import upload_resume


def health(request):
    return JsonResponse({"status": "OK", "timestamp": timezone.now().isoformat()})


urlpatterns = [
    path('api/health', health, name='health'),
    path('django-admin/', admin.site.urls),

    path('api/auth/', include('accounts.urls')),
    path('api/students/', include('students.urls')),
    path('api/upload/resume', upload_resume, name='upload-resume'),
    path('api/recruiters/', include('recruiters.urls')),
    path('api/internships', InternshipViewSet.as_view({'get': 'list'}), name='internship-list-root'),
    path('api/internships/', include('internships.urls')),
    path('api/applications/', include('applications.urls')),
    path('api/admin/', include('admin_panel.urls')),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
