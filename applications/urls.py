from django.urls import path
from rest_framework.routers import SimpleRouter
from .views import ApplicationViewSet

router = SimpleRouter(trailing_slash=False)
router.register(r'', ApplicationViewSet, basename='application')

urlpatterns = [
    path(
        'internships/<int:internship_id>/apply',
        ApplicationViewSet.as_view({'post': 'apply'}),
        name='application-apply',
    ),
] + router.urls
