import logging

from django.db import transaction
from django.db.models import Count, F, Q, Sum
from django.shortcuts import get_object_or_404
from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsRecruiter, RolePolicy, authorize
from applications import lifecycle
from applications.models import Application
from applications.serializers import (
    ApplicantSerializer, StatusUpdateSerializer, InterviewScheduleSerializer,
)
from internships.filters import RecruiterInternshipFilter
from internships.models import Internship
from internships.serializers import InternshipSerializer
from .filters import ReceivedApplicationFilter
from .models import RecruiterProfile
from .serializers import RecruiterProfileSerializer

logger = logging.getLogger(__name__)


def get_recruiter_profile(user):
    return get_object_or_404(RecruiterProfile, user=user)


class RecruiterProfileView(APIView):
    permission_classes = [IsAuthenticated, IsRecruiter]

    def get(self, request):
        profile = get_recruiter_profile(request.user)
        return Response({'success': True, 'profile': RecruiterProfileSerializer(profile).data})

    def put(self, request):
        profile = get_recruiter_profile(request.user)
        serializer = RecruiterProfileSerializer(profile, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response({'success': True, 'profile': serializer.data})


# -------------------------------
# POSTINGS
# -------------------------------
class RecruiterInternshipViewSet(viewsets.ModelViewSet):
    """
    A recruiter's own internships. Other recruiters' postings answer 404.
    """
    serializer_class = InternshipSerializer
    permission_classes = [IsAuthenticated, RolePolicy]
    policy_scope = 'internship'
    filterset_class = RecruiterInternshipFilter
    lookup_value_regex = r'\d+'

    def get_queryset(self):
        if self.action == 'list':
            return Internship.objects.filter(recruiter=self.request.user).order_by('-posted_at', '-id')
        return Internship.objects.all()

    def get_object(self):
        internship = get_object_or_404(self.get_queryset(), pk=self.kwargs['pk'])
        authorize(self.request.user, f"{self.policy_scope}.{self.action}", internship)
        return internship

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        with transaction.atomic():
            # recruiter postings go live without waiting for moderation
            internship = serializer.save(recruiter=request.user, is_approved=True)
            RecruiterProfile.objects.filter(user=request.user).update(
                internships_posted=F('internships_posted') + 1
            )

        logger.info(f"{request.user.username} posted internship {internship.pk}")
        return Response(
            {'success': True, 'internship': self.get_serializer(internship).data},
            status=status.HTTP_201_CREATED,
        )

    def retrieve(self, request, *args, **kwargs):
        return Response({'success': True, 'internship': self.get_serializer(self.get_object()).data})

    def update(self, request, *args, **kwargs):
        internship = self.get_object()
        serializer = self.get_serializer(internship, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response({'success': True, 'internship': serializer.data})

    def destroy(self, request, *args, **kwargs):
        internship = self.get_object()
        pk = internship.pk
        # applications go with it through the foreign key cascade
        internship.delete()
        logger.info(f"{request.user.username} deleted internship {pk}")
        return Response({'success': True, 'message': 'Internship deleted successfully'})

    @action(detail=True, methods=['get'])
    def applicants(self, request, pk=None):
        internship = self.get_object()
        queryset = (
            internship.applications
            .select_related('student__student_profile', 'internship')
            .prefetch_related('notes__author', 'student__student_profile__skills')
            .order_by('-applied_at', '-id')
        )
        status_filter = request.query_params.get('status')
        if status_filter:
            queryset = queryset.filter(status=status_filter)

        page = self.paginate_queryset(queryset)
        serializer = ApplicantSerializer(page, many=True, context=self.get_serializer_context())
        return self.get_paginated_response(serializer.data)


# -------------------------------
# APPLICATIONS RECEIVED
# -------------------------------
class ReceivedApplicationViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    Handles:
    - every application on the recruiter's internships
    - status changes and interview scheduling
    """
    serializer_class = ApplicantSerializer
    permission_classes = [IsAuthenticated, IsRecruiter]
    filterset_class = ReceivedApplicationFilter
    lookup_value_regex = r'\d+'

    def get_queryset(self):
        if self.action == 'list':
            return (
                Application.objects
                .filter(internship__recruiter=self.request.user)
                .select_related('internship', 'student__student_profile')
                .prefetch_related('notes__author', 'student__student_profile__skills')
                .order_by('-applied_at', '-id')
            )
        return Application.objects.select_related('internship')

    def get_object(self):
        application = get_object_or_404(self.get_queryset(), pk=self.kwargs['pk'])
        authorize(self.request.user, f"application.{self.action}", application)
        return application

    def respond(self, application, message):
        application = self.get_queryset().get(pk=application.pk)
        return Response({
            'success': True,
            'application': self.get_serializer(application).data,
            'message': message,
        })

    @action(detail=True, methods=['put'], url_path='status')
    def update_status(self, request, pk=None):
        application = self.get_object()
        serializer = StatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        new_status = serializer.validated_data['status']
        application = lifecycle.change_status(
            application, new_status, request.user, note=serializer.validated_data.get('notes', ''),
        )
        return self.respond(application, f"Application status updated to {new_status}")

    @action(detail=True, methods=['put'], url_path='schedule-interview')
    def schedule_interview(self, request, pk=None):
        application = self.get_object()
        serializer = InterviewScheduleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        application = lifecycle.schedule_interview(
            application,
            date=data['date'],
            time=data.get('time', ''),
            location=data.get('location', ''),
            interview_type=data.get('type', ''),
            notes=data.get('notes', ''),
        )
        return self.respond(application, 'Interview scheduled successfully')


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsRecruiter])
def recruiter_stats(request):
    profile = get_recruiter_profile(request.user)

    internships = Internship.objects.filter(recruiter=request.user).aggregate(
        total=Count('id'),
        active=Count('id', filter=Q(is_active=True)),
        pending=Count('id', filter=Q(is_approved=False)),
        views=Sum('views'),
    )
    applications = Application.objects.filter(internship__recruiter=request.user).aggregate(
        total=Count('id'),
        pending=Count('id', filter=Q(status=Application.APPLIED)),
        shortlisted=Count('id', filter=Q(status=Application.SHORTLISTED)),
        selected=Count('id', filter=Q(status=Application.SELECTED)),
    )

    return Response({
        'success': True,
        'stats': {
            'total_internships': internships['total'],
            'active_internships': internships['active'],
            'pending_internships': internships['pending'],
            'total_views': internships['views'] or 0,
            'total_applications': applications['total'],
            'pending_applications': applications['pending'],
            'shortlisted_applications': applications['shortlisted'],
            'selected_applications': applications['selected'],
            **profile.stats,
        },
    })
