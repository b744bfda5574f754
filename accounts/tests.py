from datetime import datetime, timedelta
from unittest.mock import patch

from django.conf import settings
from django.contrib.auth.tokens import default_token_generator
from django.test import TestCase, override_settings
from django.utils import timezone
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APIClient

from intern_track.exceptions import ConflictError
from recruiters.models import RecruiterProfile
from students.models import StudentProfile
from .models import User
from .permissions import authorize
from .serializers import RegisterSerializer
from .utils import create_role_profile

PASSWORD = 'Secret123'


def make_user(username, role=User.STUDENT, password=PASSWORD, **extra):
    user = User.objects.create_user(
        email=f'{username}@test.com', username=username, password=password, role=role, **extra
    )
    create_role_profile(user)
    return user


class RegistrationTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()

    def register(self, **overrides):
        payload = {
            'username': 'alice',
            'email': 'Alice@Test.com',
            'password': PASSWORD,
            'role': 'student',
            'first_name': 'Alice',
        }
        payload.update(overrides)
        return self.client.post('/api/auth/register', payload, format='json')

    def test_register_student_creates_profile_and_token(self):
        response = self.register()
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['success'])
        self.assertIn('token', response.data)
        self.assertEqual(response.data['user']['email'], 'alice@test.com')

        user = User.objects.get(username='alice')
        self.assertEqual(user.role, User.STUDENT)
        self.assertEqual(StudentProfile.objects.get(user=user).first_name, 'Alice')

    def test_register_recruiter_creates_recruiter_profile(self):
        response = self.register(username='bob', email='bob@test.com', role='recruiter')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(RecruiterProfile.objects.filter(user__username='bob').exists())
        self.assertFalse(StudentProfile.objects.filter(user__username='bob').exists())

    def test_admin_self_registration_is_rejected_by_default(self):
        response = self.register(role='admin')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(User.objects.filter(username='alice').exists())

    @override_settings(ALLOW_ADMIN_SIGNUP=True)
    def test_admin_self_registration_when_enabled(self):
        response = self.register(role='admin')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIsNone(User.objects.get(username='alice').profile)

    def test_duplicate_email_conflicts(self):
        self.register()
        response = self.register(username='alice2', email='alice@test.com')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertFalse(response.data['success'])
        self.assertEqual(User.objects.count(), 1)

    def test_duplicate_username_conflicts(self):
        self.register()
        response = self.register(email='other@test.com')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_weak_password_is_rejected(self):
        response = self.register(password='alllowercase')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('password', response.data['errors'])

    def test_invalid_username_is_rejected(self):
        response = self.register(username='bad name!')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('username', response.data['errors'])

    def test_registration_racing_an_insert_conflicts(self):
        serializer = RegisterSerializer(data={
            'username': 'alice', 'email': 'alice@test.com', 'password': PASSWORD,
        })
        self.assertTrue(serializer.is_valid())

        # someone else claims the email between validation and save
        make_user('alice')
        with self.assertRaises(ConflictError):
            serializer.save()
        self.assertEqual(User.objects.count(), 1)


class LoginTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = make_user('carol')

    def login(self, email='carol@test.com', password=PASSWORD):
        return self.client.post('/api/auth/login', {'email': email, 'password': password}, format='json')

    def test_login_returns_token(self):
        response = self.login()
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['token'], Token.objects.get(user=self.user).key)

        self.user.refresh_from_db()
        self.assertIsNotNone(self.user.last_login)

    def test_login_is_case_insensitive_on_email(self):
        response = self.login(email='CAROL@test.com')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_bad_password(self):
        response = self.login(password='Wrong1234')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data['message'], 'Invalid email or password')

    def test_unknown_email(self):
        response = self.login(email='nobody@test.com')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_deactivated_account_cannot_login(self):
        self.user.is_active = False
        self.user.save()
        response = self.login()
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data['message'], 'Your account has been deactivated')


class TokenTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = make_user('dave')
        self.token = Token.objects.get(user=self.user)

    def test_me_with_bearer_token(self):
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {self.token.key}')
        response = self.client.get('/api/auth/me')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['user']['username'], 'dave')
        self.assertEqual(response.data['user']['profile']['user'], self.user.id)

    def test_me_without_token(self):
        response = self.client.get('/api/auth/me')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_garbage_token(self):
        self.client.credentials(HTTP_AUTHORIZATION='Bearer not-a-real-token')
        response = self.client.get('/api/auth/me')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_expired_token_is_rejected_and_removed(self):
        Token.objects.filter(pk=self.token.pk).update(created=timezone.now() - timedelta(hours=24 * 8))
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {self.token.key}')
        response = self.client.get('/api/auth/me')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(Token.objects.filter(pk=self.token.pk).exists())

    def test_logout_invalidates_token(self):
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {self.token.key}')
        response = self.client.post('/api/auth/logout')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        response = self.client.get('/api/auth/me')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_deactivated_user_token_is_rejected(self):
        self.user.is_active = False
        self.user.save()
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {self.token.key}')
        response = self.client.get('/api/auth/me')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class UpdatePasswordTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = make_user('erin')
        self.client.force_authenticate(user=self.user)

    def test_wrong_current_password(self):
        response = self.client.put('/api/auth/updatepassword', {
            'current_password': 'Nope1234',
            'new_password': 'NewSecret1',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('current_password', response.data['errors'])

    def test_update_password_issues_new_token(self):
        old_key = Token.objects.get(user=self.user).key
        response = self.client.put('/api/auth/updatepassword', {
            'current_password': PASSWORD,
            'new_password': 'NewSecret1',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertNotEqual(response.data['token'], old_key)

        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password('NewSecret1'))


class PasswordResetTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = make_user('frank')

    def request_reset(self, email='frank@test.com'):
        return self.client.post('/api/auth/forgotpassword', {'email': email}, format='json')

    def reset(self, uid, token, password='Fresh1234'):
        return self.client.put(f'/api/auth/resetpassword/{uid}/{token}', {'password': password}, format='json')

    def test_unknown_email(self):
        response = self.request_reset('nobody@test.com')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['message'], 'There is no user with that email')

    def test_reset_with_valid_token(self):
        response = self.request_reset('Frank@Test.com')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        response = self.reset(response.data['uid'], response.data['reset_token'])
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('token', response.data)

        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password('Fresh1234'))
        login = self.client.post('/api/auth/login', {
            'email': 'frank@test.com', 'password': 'Fresh1234',
        }, format='json')
        self.assertEqual(login.status_code, status.HTTP_200_OK)

    def test_token_cannot_be_reused(self):
        data = self.request_reset().data
        self.assertEqual(self.reset(data['uid'], data['reset_token']).status_code, status.HTTP_200_OK)

        response = self.reset(data['uid'], data['reset_token'], password='Another123')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password('Fresh1234'))

    def test_invalid_token(self):
        uid = self.request_reset().data['uid']
        response = self.reset(uid, 'abc-123')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['message'], 'Invalid or expired reset token')

        response = self.reset('not-a-uid', 'abc-123')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_expired_token(self):
        data = self.request_reset().data
        later = datetime.now() + timedelta(seconds=settings.PASSWORD_RESET_TIMEOUT + 60)
        with patch.object(default_token_generator, '_now', return_value=later):
            response = self.reset(data['uid'], data['reset_token'])
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password(PASSWORD))

    def test_weak_new_password(self):
        data = self.request_reset().data
        response = self.reset(data['uid'], data['reset_token'], password='weak')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('password', response.data['errors'])


class AccessPolicyTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.student = make_user('frank')
        self.recruiter = make_user('grace', role=User.RECRUITER)

    def test_student_cannot_use_recruiter_endpoints(self):
        self.client.force_authenticate(user=self.student)
        response = self.client.get('/api/recruiters/profile')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(response.data['success'])

    def test_recruiter_cannot_use_student_endpoints(self):
        self.client.force_authenticate(user=self.recruiter)
        response = self.client.get('/api/students/profile')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_authorize_role_mismatch_and_ownership(self):
        from rest_framework.exceptions import NotFound, PermissionDenied

        with self.assertRaises(PermissionDenied):
            authorize(self.student, 'internship.create')

        class Posting:
            recruiter_id = None

        posting = Posting()
        posting.recruiter_id = self.recruiter.pk + 100
        with self.assertRaises(NotFound):
            authorize(self.recruiter, 'internship.update', posting)

        posting.recruiter_id = self.recruiter.pk
        self.assertTrue(authorize(self.recruiter, 'internship.update', posting))
