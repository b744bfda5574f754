from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import (
    StudentProfileView, SkillViewSet, EducationViewSet, ExperienceViewSet,
    PortfolioViewSet, AssessmentViewSet, student_stats,
)

# profile collections are routed without trailing slashes
router = DefaultRouter(trailing_slash=False)
router.register(r'skills', SkillViewSet, basename='skill')
router.register(r'education', EducationViewSet, basename='education')
router.register(r'experience', ExperienceViewSet, basename='experience')
router.register(r'portfolio', PortfolioViewSet, basename='portfolio')
router.register(r'assessments', AssessmentViewSet, basename='assessment')


urlpatterns = [
    path('profile', StudentProfileView.as_view(), name='student-profile'),
    path('stats', student_stats, name='student-stats'),

    path('', include(router.urls)),
]
