from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.shortcuts import get_object_or_404
from accounts.models import User
from accounts.permissions import IsAdmin
from accounts.serializers import UserSerializer
from applications.models import Application
from applications.serializers import ApplicationSerializer
from internships.filters import AdminInternshipFilter
from internships.models import Internship
from internships.serializers import InternshipModerationSerializer, RejectInternshipSerializer
from recruiters.filters import RecruiterProfileFilter
from recruiters.models import RecruiterProfile
from recruiters.serializers import RecruiterSummarySerializer
from students.models import SkillAssessment
from students.serializers import StudentProfileSerializer, SkillAssessmentSerializer
from .filters import StudentFilter, AdminActivityFilter
from .models import AdminActivity
from .serializers import AdminActivitySerializer, AdminStudentSerializer
from .utils import log_admin_activity, get_client_ip, generate_analytics
import logging


logger = logging.getLogger(__name__)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdmin])
def analytics(request):
    """Platform overview, application breakdown, skill distribution and top students"""
    try:
        data = generate_analytics()
    except Exception as e:
        logger.error(f"Analytics error: {str(e)}")
        return Response(
            {'success': False, 'message': 'Could not build analytics'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
    return Response({'success': True, 'analytics': data})


class StudentManagementViewSet(viewsets.ReadOnlyModelViewSet):
    """Browse student accounts with their profiles, applications and assessments"""
    serializer_class = AdminStudentSerializer
    permission_classes = [IsAuthenticated, IsAdmin]
    filterset_class = StudentFilter
    lookup_value_regex = r'\d+'

    def get_queryset(self):
        return (
            User.objects.filter(role=User.STUDENT)
            .select_related('student_profile')
            .prefetch_related('student_profile__skills')
            .order_by('-date_joined', '-id')
        )

    def retrieve(self, request, pk=None):
        student = get_object_or_404(self.get_queryset(), pk=pk)
        profile = getattr(student, 'student_profile', None)

        applications = (
            Application.objects.filter(student=student)
            .select_related('internship', 'student', 'recruiter')
            .prefetch_related('notes__author')
        )
        assessments = SkillAssessment.objects.filter(student=student)

        return Response({
            'success': True,
            'student': AdminStudentSerializer(student).data,
            'profile': StudentProfileSerializer(profile).data if profile else None,
            'applications': ApplicationSerializer(applications, many=True).data,
            'assessments': SkillAssessmentSerializer(assessments, many=True).data,
        })


class InternshipModerationViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """Approve or reject any internship"""
    serializer_class = InternshipModerationSerializer
    permission_classes = [IsAuthenticated, IsAdmin]
    filterset_class = AdminInternshipFilter
    lookup_value_regex = r'\d+'

    def get_queryset(self):
        return Internship.objects.select_related('recruiter').order_by('-posted_at', '-id')

    @action(detail=True, methods=['put'])
    def approve(self, request, pk=None):
        internship = get_object_or_404(Internship, pk=pk)

        # approving a rejected posting also reopens it
        if internship.rejection_reason:
            internship.is_active = True
        internship.is_approved = True
        internship.rejection_reason = ''
        internship.save(update_fields=['is_approved', 'is_active', 'rejection_reason', 'updated_at'])

        log_admin_activity(
            admin=request.user,
            action='APPROVE',
            model_name='Internship',
            object_id=internship.id,
            description=f"Approved internship {internship.title}",
            ip_address=get_client_ip(request)
        )

        return Response({
            'success': True,
            'internship': self.get_serializer(internship).data,
            'message': 'Internship approved successfully'
        })

    @action(detail=True, methods=['put'])
    def reject(self, request, pk=None):
        internship = get_object_or_404(Internship, pk=pk)
        serializer = RejectInternshipSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        internship.is_approved = False
        internship.is_active = False
        internship.rejection_reason = serializer.validated_data['reason']
        internship.save(update_fields=['is_approved', 'is_active', 'rejection_reason', 'updated_at'])

        log_admin_activity(
            admin=request.user,
            action='REJECT',
            model_name='Internship',
            object_id=internship.id,
            description=f"Rejected internship {internship.title}: {internship.rejection_reason}",
            ip_address=get_client_ip(request)
        )

        return Response({
            'success': True,
            'internship': self.get_serializer(internship).data,
            'message': 'Internship rejected successfully'
        })


class UserManagementViewSet(viewsets.GenericViewSet):
    """Account activation for any user"""
    serializer_class = UserSerializer
    permission_classes = [IsAuthenticated, IsAdmin]
    lookup_value_regex = r'\d+'

    def get_queryset(self):
        return User.objects.all()

    @action(detail=True, methods=['put'], url_path='toggle-status')
    def toggle_status(self, request, pk=None):
        """Toggle user active status"""
        user = get_object_or_404(User, pk=pk)

        if user.pk == request.user.pk and user.is_active:
            return Response(
                {'success': False, 'message': 'You cannot deactivate your own account'},
                status=status.HTTP_400_BAD_REQUEST
            )

        user.is_active = not user.is_active
        user.save(update_fields=['is_active'])

        log_admin_activity(
            admin=request.user,
            action='UPDATE',
            model_name='User',
            object_id=user.id,
            description=f"{'Activated' if user.is_active else 'Deactivated'} user {user.username}",
            ip_address=get_client_ip(request)
        )

        return Response({
            'success': True,
            'user': self.get_serializer(user).data,
            'message': f"User {'activated' if user.is_active else 'deactivated'} successfully"
        })


class RecruiterManagementViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """Browse and verify recruiters. Detail routes take the recruiter's user id."""
    serializer_class = RecruiterSummarySerializer
    permission_classes = [IsAuthenticated, IsAdmin]
    filterset_class = RecruiterProfileFilter
    lookup_value_regex = r'\d+'

    def get_queryset(self):
        return RecruiterProfile.objects.select_related('user').order_by('-created_at', '-id')

    @action(detail=True, methods=['put'])
    def verify(self, request, pk=None):
        profile = get_object_or_404(RecruiterProfile, user_id=pk)
        profile.is_verified = True
        profile.save(update_fields=['is_verified', 'updated_at'])

        log_admin_activity(
            admin=request.user,
            action='VERIFY',
            model_name='RecruiterProfile',
            object_id=profile.id,
            description=f"Verified recruiter {profile.user.username}",
            ip_address=get_client_ip(request)
        )

        return Response({
            'success': True,
            'profile': self.get_serializer(profile).data,
            'message': 'Recruiter verified successfully'
        })


class AdminActivityViewSet(viewsets.ReadOnlyModelViewSet):
    """View admin activity logs"""
    queryset = AdminActivity.objects.select_related('admin')
    serializer_class = AdminActivitySerializer
    permission_classes = [IsAuthenticated, IsAdmin]
    filterset_class = AdminActivityFilter
