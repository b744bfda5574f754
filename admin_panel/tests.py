from datetime import date, timedelta

from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework import status

from accounts.models import User
from accounts.utils import create_role_profile
from applications import lifecycle
from internships.models import Internship
from recruiters.models import RecruiterProfile
from students.models import Skill
from .models import AdminActivity
from .utils import get_client_ip


def make_user(username, role=User.STUDENT):
    user = User.objects.create_user(
        email=f'{username}@test.com', username=username, password='Secret123', role=role
    )
    create_role_profile(user)
    return user


def make_internship(recruiter, **kwargs):
    data = {
        'title': 'Backend Intern',
        'company': 'Acme',
        'description': 'Build APIs',
        'location': 'Lagos',
        'work_type': 'remote',
        'duration': '3 months',
        'start_date': date.today() + timedelta(days=30),
        'industry': 'Technology',
        'application_deadline': timezone.now() + timedelta(days=10),
    }
    data.update(kwargs)
    return Internship.objects.create(recruiter=recruiter, **data)


class AdminPanelTestCase(TestCase):
    def setUp(self):
        # Create admin user
        self.admin_user = User.objects.create_superuser(
            username='admin',
            email='admin@test.com',
            password='Admin123'
        )

        self.student = make_user('student')
        self.recruiter = make_user('recruiter', role=User.RECRUITER)

        self.client = APIClient()
        self.client.force_authenticate(user=self.admin_user)


class AnalyticsTestCase(AdminPanelTestCase):
    def test_analytics_authenticated(self):
        """Analytics returns the overview and breakdowns"""
        profile = self.student.student_profile
        Skill.objects.create(profile=profile, name='Python', score=80)
        Skill.objects.create(profile=profile, name='SQL', score=40)
        internship = make_internship(self.recruiter, is_approved=True)
        make_internship(self.recruiter, title='Pending')
        lifecycle.apply(self.student, internship.id)

        response = self.client.get('/api/admin/analytics')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        analytics = response.data['analytics']
        self.assertEqual(analytics['overview']['total_students'], 1)
        self.assertEqual(analytics['overview']['total_recruiters'], 1)
        self.assertEqual(analytics['overview']['total_internships'], 2)
        self.assertEqual(analytics['overview']['pending_internships'], 1)
        self.assertEqual(analytics['application_stats'], {'applied': 1})
        self.assertEqual(len(analytics['skills_distribution']), 2)
        self.assertEqual(analytics['top_students'][0]['total_score'], 120)
        self.assertEqual(analytics['recent_students'][0]['username'], 'student')

    def test_analytics_unauthenticated(self):
        """Analytics without authentication"""
        response = APIClient().get('/api/admin/analytics')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_analytics_forbidden_for_non_admin(self):
        client = APIClient()
        client.force_authenticate(user=self.recruiter)
        response = client.get('/api/admin/analytics')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_list_and_filter_students(self):
        Skill.objects.create(profile=self.student.student_profile, name='Django')
        make_user('another')

        response = self.client.get('/api/admin/students')
        self.assertEqual(response.data['pagination']['total'], 2)

        response = self.client.get('/api/admin/students', {'skills': 'django'})
        self.assertEqual([s['username'] for s in response.data['results']], ['student'])

    def test_student_detail(self):
        internship = make_internship(self.recruiter, is_approved=True)
        lifecycle.apply(self.student, internship.id)

        response = self.client.get(f'/api/admin/students/{self.student.id}')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['student']['username'], 'student')
        self.assertEqual(len(response.data['applications']), 1)
        self.assertEqual(response.data['assessments'], [])

    def test_student_detail_for_recruiter_id(self):
        response = self.client.get(f'/api/admin/students/{self.recruiter.id}')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class ModerationTestCase(AdminPanelTestCase):
    def test_pending_queue(self):
        make_internship(self.recruiter, title='Approved', is_approved=True)
        make_internship(self.recruiter, title='Waiting')

        response = self.client.get('/api/admin/internships', {'status': 'pending'})
        self.assertEqual([i['title'] for i in response.data['results']], ['Waiting'])

    def test_approve(self):
        internship = make_internship(self.recruiter)
        response = self.client.put(f'/api/admin/internships/{internship.id}/approve')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        internship.refresh_from_db()
        self.assertTrue(internship.is_approved)
        self.assertTrue(internship.is_public)
        self.assertTrue(AdminActivity.objects.filter(action='APPROVE', object_id=internship.id).exists())

    def test_reject_then_approve(self):
        internship = make_internship(self.recruiter, is_approved=True)
        response = self.client.put(
            f'/api/admin/internships/{internship.id}/reject', {'reason': 'Unpaid full-time role'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        internship.refresh_from_db()
        self.assertFalse(internship.is_approved)
        self.assertFalse(internship.is_active)
        self.assertEqual(internship.rejection_reason, 'Unpaid full-time role')
        self.assertEqual(APIClient().get(f'/api/internships/{internship.id}').status_code, status.HTTP_404_NOT_FOUND)

        self.client.put(f'/api/admin/internships/{internship.id}/approve')
        internship.refresh_from_db()
        self.assertTrue(internship.is_active)
        self.assertEqual(internship.rejection_reason, '')

    def test_reject_requires_reason(self):
        internship = make_internship(self.recruiter)
        response = self.client.put(f'/api/admin/internships/{internship.id}/reject', {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_approve_missing(self):
        response = self.client.put('/api/admin/internships/9999/approve')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class UserManagementTestCase(AdminPanelTestCase):
    def test_toggle_status(self):
        url = f'/api/admin/users/{self.student.id}/toggle-status'
        response = self.client.put(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data['user']['is_active'])

        login = APIClient().post(
            '/api/auth/login', {'email': 'student@test.com', 'password': 'Secret123'}, format='json'
        )
        self.assertEqual(login.status_code, status.HTTP_401_UNAUTHORIZED)

        self.client.put(url)
        login = APIClient().post(
            '/api/auth/login', {'email': 'student@test.com', 'password': 'Secret123'}, format='json'
        )
        self.assertEqual(login.status_code, status.HTTP_200_OK)

    def test_cannot_deactivate_self(self):
        response = self.client.put(f'/api/admin/users/{self.admin_user.id}/toggle-status')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['message'], 'You cannot deactivate your own account')

        self.admin_user.refresh_from_db()
        self.assertTrue(self.admin_user.is_active)

    def test_verify_recruiter(self):
        response = self.client.put(f'/api/admin/recruiters/{self.recruiter.id}/verify')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(RecruiterProfile.objects.get(user=self.recruiter).is_verified)

        response = self.client.get('/api/admin/recruiters', {'is_verified': 'true'})
        self.assertEqual(response.data['pagination']['total'], 1)

    def test_verify_unknown_recruiter(self):
        response = self.client.put(f'/api/admin/recruiters/{self.student.id}/verify')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class AdminActivityTestCase(AdminPanelTestCase):
    def test_actions_are_logged(self):
        self.client.put(f'/api/admin/users/{self.student.id}/toggle-status')
        self.client.put(f'/api/admin/recruiters/{self.recruiter.id}/verify')

        response = self.client.get('/api/admin/activities')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([a['action'] for a in response.data['results']], ['VERIFY', 'UPDATE'])

        response = self.client.get('/api/admin/activities', {'action': 'VERIFY'})
        self.assertEqual(response.data['pagination']['total'], 1)

    def test_admin_login_is_logged(self):
        response = APIClient().post(
            '/api/auth/login', {'email': 'admin@test.com', 'password': 'Admin123'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(AdminActivity.objects.filter(admin=self.admin_user, action='LOGIN').exists())

    def test_student_login_is_not_logged(self):
        APIClient().post('/api/auth/login', {'email': 'student@test.com', 'password': 'Secret123'}, format='json')
        self.assertFalse(AdminActivity.objects.exists())

    def test_get_client_ip(self):
        """Forwarded header wins over the socket address"""
        request = type('Request', (), {'META': {'HTTP_X_FORWARDED_FOR': '10.0.0.1, 10.0.0.2', 'REMOTE_ADDR': '127.0.0.1'}})()
        self.assertEqual(get_client_ip(request), '10.0.0.1')
