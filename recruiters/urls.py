from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import (
    RecruiterProfileView, RecruiterInternshipViewSet, ReceivedApplicationViewSet, recruiter_stats,
)

router = DefaultRouter(trailing_slash=False)
router.register(r'internships', RecruiterInternshipViewSet, basename='recruiter-internship')
router.register(r'applications', ReceivedApplicationViewSet, basename='recruiter-application')


urlpatterns = [
    path('profile', RecruiterProfileView.as_view(), name='recruiter-profile'),
    path('stats', recruiter_stats, name='recruiter-stats'),

    path('', include(router.urls)),
]
