from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import RolePolicy, authorize
from . import lifecycle
from .models import Application
from .serializers import (
    ApplicationSerializer, ApplicationNoteSerializer, ApplySerializer,
    ApplicationUpdateSerializer, NoteCreateSerializer,
)
from .stats import application_stats, scoped_applications


class ApplicationViewSet(viewsets.GenericViewSet):
    """
    Handles:
    - applying to an internship and listing one's own applications (students)
    - application detail for the student, the owning recruiter or an admin
    - withdrawal, notes and feedback
    - role-scoped application statistics
    """
    serializer_class = ApplicationSerializer
    permission_classes = [IsAuthenticated, RolePolicy]
    policy_scope = 'application'
    lookup_value_regex = r'\d+'

    def get_queryset(self):
        return (
            Application.objects
            .select_related('internship', 'student', 'recruiter')
            .prefetch_related('notes__author')
        )

    def get_authorized_object(self):
        application = self.get_object()
        authorize(self.request.user, f"{self.policy_scope}.{self.action}", application)
        return application

    def respond(self, application, message=None, status_code=status.HTTP_200_OK):
        application = self.get_queryset().get(pk=application.pk)
        data = {'success': True, 'application': self.get_serializer(application).data}
        if message:
            data['message'] = message
        return Response(data, status=status_code)

    # -------------------------------
    # STUDENT
    # -------------------------------
    def apply(self, request, internship_id=None):
        serializer = ApplySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        application = lifecycle.apply(
            request.user,
            internship_id,
            cover_letter=serializer.validated_data.get('cover_letter', ''),
            resume=serializer.validated_data.get('resume'),
        )
        return self.respond(application, 'Application submitted successfully', status.HTTP_201_CREATED)

    @action(detail=False, methods=['get'], url_path='my-applications')
    def my_applications(self, request):
        queryset = self.get_queryset().filter(student=request.user)
        status_filter = request.query_params.get('status')
        if status_filter:
            queryset = queryset.filter(status=status_filter)

        page = self.paginate_queryset(queryset.order_by('-applied_at', '-id'))
        serializer = self.get_serializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    @action(detail=True, methods=['put'])
    def withdraw(self, request, pk=None):
        application = lifecycle.withdraw(self.get_authorized_object())
        return self.respond(application, 'Application withdrawn successfully')

    # -------------------------------
    # SHARED
    # -------------------------------
    def retrieve(self, request, pk=None):
        return self.respond(self.get_authorized_object())

    def update(self, request, pk=None):
        """Append a note and/or record feedback."""
        application = self.get_authorized_object()
        serializer = ApplicationUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        if data.get('notes'):
            lifecycle.add_note(application, request.user, data['notes'])
        if 'feedback' in data:
            lifecycle.set_feedback(
                application, request.user,
                rating=data['feedback']['rating'],
                comments=data['feedback'].get('comments', ''),
            )
        return self.respond(application, 'Application updated successfully')

    @action(detail=True, methods=['post'], url_path='notes')
    def add_note(self, request, pk=None):
        application = self.get_authorized_object()
        serializer = NoteCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        note = lifecycle.add_note(application, request.user, serializer.validated_data['content'])
        return Response({
            'success': True,
            'note': ApplicationNoteSerializer(note).data,
            'message': 'Note added successfully',
        }, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['get'], url_path='stats/me')
    def stats(self, request):
        return Response({
            'success': True,
            'stats': application_stats(scoped_applications(request.user)),
        })
