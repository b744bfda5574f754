from datetime import date, timedelta

from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from accounts.models import User
from accounts.utils import create_role_profile
from applications import lifecycle
from applications.models import Application
from internships.models import Internship
from .models import RecruiterProfile


def make_user(username, role=User.RECRUITER):
    user = User.objects.create_user(
        email=f'{username}@test.com', username=username, password='Secret123', role=role
    )
    create_role_profile(user)
    return user


def posting_payload(**kwargs):
    payload = {
        'title': 'Data Intern',
        'company': 'Acme',
        'description': 'Clean and analyse data',
        'location': 'Lagos',
        'work_type': 'hybrid',
        'duration': '3 months',
        'start_date': (date.today() + timedelta(days=30)).isoformat(),
        'industry': 'Technology',
        'application_deadline': (timezone.now() + timedelta(days=14)).isoformat(),
        'skills': ['SQL', ' Python '],
    }
    payload.update(kwargs)
    return payload


class RecruiterTestCase(TestCase):
    def setUp(self):
        self.recruiter = make_user('rec')
        self.client = APIClient()
        self.client.force_authenticate(user=self.recruiter)

    def client_for(self, user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client

    def post_internship(self, **kwargs):
        response = self.client.post('/api/recruiters/internships', posting_payload(**kwargs), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        return Internship.objects.get(pk=response.data['internship']['id'])


class RecruiterProfileTestCase(RecruiterTestCase):
    def test_get_profile(self):
        response = self.client.get('/api/recruiters/profile')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['profile']['username'], 'rec')
        self.assertFalse(response.data['profile']['is_verified'])

    def test_cannot_verify_self(self):
        response = self.client.put('/api/recruiters/profile', {
            'company': 'Acme', 'company_size': '11-50', 'is_verified': True,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        profile = RecruiterProfile.objects.get(user=self.recruiter)
        self.assertEqual(profile.company, 'Acme')
        self.assertFalse(profile.is_verified)

    def test_student_forbidden(self):
        response = self.client_for(make_user('stu', role=User.STUDENT)).get('/api/recruiters/profile')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class RecruiterInternshipTestCase(RecruiterTestCase):
    def test_create_goes_live(self):
        internship = self.post_internship()
        self.assertTrue(internship.is_approved)
        self.assertEqual(internship.recruiter, self.recruiter)
        self.assertEqual(internship.skills, ['SQL', 'Python'])
        self.assertEqual(RecruiterProfile.objects.get(user=self.recruiter).internships_posted, 1)

        response = APIClient().get(f'/api/internships/{internship.id}')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_create_ignores_moderation_fields(self):
        internship = self.post_internship(views=500, applications_count=9)
        self.assertEqual(internship.views, 0)
        self.assertEqual(internship.applications_count, 0)

    def test_create_validates_dates(self):
        payload = posting_payload(
            start_date='2030-06-01',
            end_date='2030-01-01',
        )
        response = self.client.post('/api/recruiters/internships', payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('end_date', response.data['errors'])

    def test_student_cannot_post(self):
        client = self.client_for(make_user('stu', role=User.STUDENT))
        response = client.post('/api/recruiters/internships', posting_payload(), format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_list_own_postings_with_status_filter(self):
        self.post_internship(title='Live')
        closed = self.post_internship(title='Closed')
        Internship.objects.filter(pk=closed.pk).update(is_active=False)
        Internship.objects.create(
            recruiter=make_user('rival'), title='Theirs', company='X', description='x',
            location='Lagos', work_type='remote', duration='1 month', start_date=date.today(),
            industry='Tech', application_deadline=timezone.now() + timedelta(days=3),
        )

        response = self.client.get('/api/recruiters/internships')
        self.assertEqual({item['title'] for item in response.data['results']}, {'Live', 'Closed'})

        response = self.client.get('/api/recruiters/internships', {'status': 'inactive'})
        self.assertEqual([item['title'] for item in response.data['results']], ['Closed'])

    def test_update_own_posting(self):
        internship = self.post_internship()
        response = self.client.put(
            f'/api/recruiters/internships/{internship.id}', {'title': 'Senior Data Intern'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['internship']['title'], 'Senior Data Intern')

    def test_other_recruiter_gets_not_found(self):
        internship = self.post_internship()
        rival = self.client_for(make_user('rival'))

        url = f'/api/recruiters/internships/{internship.id}'
        self.assertEqual(rival.get(url).status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(rival.put(url, {'title': 'Mine'}, format='json').status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(rival.delete(url).status_code, status.HTTP_404_NOT_FOUND)
        self.assertTrue(Internship.objects.filter(pk=internship.pk).exists())

    def test_delete_cascades_to_applications(self):
        internship = self.post_internship()
        lifecycle.apply(make_user('stu', role=User.STUDENT), internship.id)

        response = self.client.delete(f'/api/recruiters/internships/{internship.id}')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Internship.objects.filter(pk=internship.pk).exists())
        self.assertEqual(Application.objects.count(), 0)


class ApplicantsTestCase(RecruiterTestCase):
    def setUp(self):
        super().setUp()
        self.internship = self.post_internship()
        self.student = make_user('stu', role=User.STUDENT)
        self.application = lifecycle.apply(self.student, self.internship.id, cover_letter='Hi')
        lifecycle.apply(make_user('stu2', role=User.STUDENT), self.internship.id)

    def test_applicants_include_student_profile(self):
        response = self.client.get(f'/api/recruiters/internships/{self.internship.id}/applicants')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['pagination']['total'], 2)
        self.assertIn('student_profile', response.data['results'][0])

    def test_applicants_status_filter(self):
        lifecycle.change_status(self.application, Application.SHORTLISTED, self.recruiter)
        response = self.client.get(
            f'/api/recruiters/internships/{self.internship.id}/applicants', {'status': 'shortlisted'}
        )
        self.assertEqual(response.data['pagination']['total'], 1)
        self.assertEqual(response.data['results'][0]['student_profile']['username'], 'stu')

    def test_applicants_hidden_from_rival(self):
        response = self.client_for(make_user('rival')).get(
            f'/api/recruiters/internships/{self.internship.id}/applicants'
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_received_applications(self):
        response = self.client.get('/api/recruiters/applications', {'internship': self.internship.id})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['pagination']['total'], 2)

    def test_update_status(self):
        url = f'/api/recruiters/applications/{self.application.id}/status'
        response = self.client.put(url, {'status': 'shortlisted', 'notes': 'Good CV'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['application']['status'], 'shortlisted')
        self.assertEqual(response.data['application']['notes'][0]['content'], 'Good CV')

        response = self.client.put(url, {'status': 'selected'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(RecruiterProfile.objects.get(user=self.recruiter).candidates_hired, 1)

        response = self.client.put(url, {'status': 'selected'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(RecruiterProfile.objects.get(user=self.recruiter).candidates_hired, 1)

    def test_update_status_rejects_withdrawn(self):
        response = self.client.put(
            f'/api/recruiters/applications/{self.application.id}/status', {'status': 'withdrawn'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_update_status_unknown_value(self):
        response = self.client.put(
            f'/api/recruiters/applications/{self.application.id}/status', {'status': 'hired'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_rival_cannot_change_status(self):
        response = self.client_for(make_user('rival')).put(
            f'/api/recruiters/applications/{self.application.id}/status', {'status': 'rejected'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_schedule_interview(self):
        response = self.client.put(
            f'/api/recruiters/applications/{self.application.id}/schedule-interview',
            {'date': '2030-02-01', 'time': '14:00', 'type': 'video', 'location': 'Zoom'},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['application']['status'], 'interview')

        self.application.refresh_from_db()
        self.assertEqual(self.application.interview_date, date(2030, 2, 1))
        self.assertEqual(self.application.interview_type, 'video')

    def test_stats(self):
        lifecycle.change_status(self.application, Application.SHORTLISTED, self.recruiter)
        response = self.client.get('/api/recruiters/stats')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        stats = response.data['stats']
        self.assertEqual(stats['total_internships'], 1)
        self.assertEqual(stats['total_applications'], 2)
        self.assertEqual(stats['shortlisted_applications'], 1)
        self.assertEqual(stats['pending_applications'], 1)
        self.assertEqual(stats['applications_received'], 2)
