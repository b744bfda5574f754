from django.db import IntegrityError, transaction
from django.db.models import Avg, Count, Q
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action, api_view, permission_classes, parser_classes
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsStudent, RolePolicy, authorize
from intern_track.exceptions import ConflictError
from .models import StudentProfile, Skill, Education, Experience, PortfolioItem, SkillAssessment
from .serializers import (
    StudentProfileSerializer, SkillSerializer, SkillUpdateSerializer,
    EducationSerializer, ExperienceSerializer, PortfolioItemSerializer,
    SkillAssessmentSerializer, AssessmentSubmissionSerializer,
)
from .utils import record_assessment, store_resume


def get_student_profile(user):
    return get_object_or_404(StudentProfile, user=user)


class StudentProfileView(APIView):
    permission_classes = [IsAuthenticated, IsStudent]

    def get(self, request):
        profile = get_student_profile(request.user)
        return Response({'success': True, 'profile': StudentProfileSerializer(profile).data})

    def put(self, request):
        """Partial update of the caller's own profile"""
        profile = get_student_profile(request.user)
        serializer = StudentProfileSerializer(profile, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response({'success': True, 'profile': serializer.data})


class ProfileChildViewSet(viewsets.ModelViewSet):
    """CRUD over one of the caller's profile collections."""
    permission_classes = [IsAuthenticated, IsStudent]
    pagination_class = None
    model = None

    def get_profile(self):
        if not hasattr(self, '_profile'):
            self._profile = get_student_profile(self.request.user)
        return self._profile

    def get_queryset(self):
        return self.model.objects.filter(profile=self.get_profile())

    def get_serializer_context(self):
        context = super().get_serializer_context()
        if self.request.user.is_authenticated and self.request.user.is_student:
            context['profile'] = self.get_profile()
        return context

    def perform_create(self, serializer):
        serializer.save(profile=self.get_profile())


class SkillViewSet(ProfileChildViewSet):
    """
    Handles:
    - add / list / update / remove skills on the caller's profile
    - recruiter endorsements of any student's skill
    """
    model = Skill
    serializer_class = SkillSerializer
    policy_scope = 'skill'
    http_method_names = ['get', 'post', 'put', 'patch', 'delete']

    def get_permissions(self):
        if self.action == 'endorse':
            return [IsAuthenticated(), RolePolicy()]
        return super().get_permissions()

    def get_queryset(self):
        if self.action == 'endorse':
            return Skill.objects.all()
        return super().get_queryset().prefetch_related('endorsements')

    def get_serializer_class(self):
        if self.action in ('update', 'partial_update'):
            return SkillUpdateSerializer
        return SkillSerializer

    def perform_create(self, serializer):
        try:
            with transaction.atomic():
                super().perform_create(serializer)
        except IntegrityError:
            raise ConflictError("Skill already exists in profile")

    def update(self, request, *args, **kwargs):
        skill = self.get_object()
        serializer = SkillUpdateSerializer(skill, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        data = serializer.validated_data
        if 'proficiency' in data:
            skill.proficiency = data['proficiency']
        if 'score' in data:
            # any score write counts as an assessment
            skill.score = data['score']
            skill.last_assessed = timezone.now()
        skill.save()

        return Response(SkillSerializer(skill).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=['post'])
    def endorse(self, request, pk=None):
        skill = self.get_object()
        authorize(request.user, 'skill.endorse', skill)
        skill.endorsements.add(request.user)
        return Response(SkillSerializer(skill).data, status=status.HTTP_200_OK)


class EducationViewSet(ProfileChildViewSet):
    model = Education
    serializer_class = EducationSerializer


class ExperienceViewSet(ProfileChildViewSet):
    model = Experience
    serializer_class = ExperienceSerializer


class PortfolioViewSet(ProfileChildViewSet):
    model = PortfolioItem
    serializer_class = PortfolioItemSerializer


class AssessmentViewSet(mixins.ListModelMixin,
                        mixins.RetrieveModelMixin,
                        mixins.CreateModelMixin,
                        viewsets.GenericViewSet):
    """Completed skill assessments. Attempts are append-only."""
    serializer_class = SkillAssessmentSerializer
    permission_classes = [IsAuthenticated, IsStudent]
    pagination_class = None

    def get_queryset(self):
        return SkillAssessment.objects.filter(student=self.request.user)

    def create(self, request, *args, **kwargs):
        serializer = AssessmentSubmissionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        get_student_profile(request.user)
        assessment = record_assessment(
            request.user,
            data['skill'],
            data['questions'],
            data['answers'],
            started_at=data.get('started_at'),
        )
        return Response(SkillAssessmentSerializer(assessment).data, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsStudent])
def student_stats(request):
    """Totals recomputed from source rows"""
    from applications.models import Application

    profile = get_student_profile(request.user)
    applications = Application.objects.filter(student=request.user).aggregate(
        total=Count('id'),
        shortlisted=Count('id', filter=Q(status='shortlisted')),
        selected=Count('id', filter=Q(status='selected')),
    )
    skills = profile.skills.aggregate(
        total=Count('id'),
        assessed=Count('id', filter=Q(last_assessed__isnull=False)),
        average=Avg('score'),
    )
    assessments = SkillAssessment.objects.filter(student=request.user).aggregate(
        total=Count('id'),
        average=Avg('score'),
    )

    return Response({
        'success': True,
        'stats': {
            'total_applications': applications['total'],
            'shortlisted_applications': applications['shortlisted'],
            'selected_applications': applications['selected'],
            'total_skills': skills['total'],
            'assessed_skills': skills['assessed'],
            'average_skill_score': skills['average'] or 0,
            'total_assessments': assessments['total'],
            'average_assessment_score': assessments['average'] or 0,
        },
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsStudent])
@parser_classes([MultiPartParser, FormParser])
def upload_resume(request):
    upload = request.FILES.get('resume')
    if upload is None:
        return Response({'success': False, 'message': 'No file uploaded'}, status=status.HTTP_400_BAD_REQUEST)

    profile = get_student_profile(request.user)
    url, filename = store_resume(request.user, upload)

    profile.resume_url = url
    profile.resume_filename = filename
    profile.resume_uploaded_at = timezone.now()
    profile.save(update_fields=['resume_url', 'resume_filename', 'resume_uploaded_at', 'updated_at'])

    return Response({
        'success': True,
        'message': 'Resume uploaded successfully',
        'resume': {'url': url, 'filename': filename},
    })
