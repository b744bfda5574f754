from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import (
    analytics,
    StudentManagementViewSet,
    InternshipModerationViewSet,
    UserManagementViewSet,
    RecruiterManagementViewSet,
    AdminActivityViewSet,
)

router = DefaultRouter(trailing_slash=False)
router.register(r'students', StudentManagementViewSet, basename='admin-students')
router.register(r'internships', InternshipModerationViewSet, basename='admin-internships')
router.register(r'users', UserManagementViewSet, basename='admin-users')
router.register(r'recruiters', RecruiterManagementViewSet, basename='admin-recruiters')
router.register(r'activities', AdminActivityViewSet, basename='activities')

urlpatterns = [
    path('analytics', analytics, name='admin-analytics'),
    path('', include(router.urls)),
]
