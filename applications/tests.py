from datetime import date, timedelta
from io import StringIO

from django.core.management import call_command
from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from accounts.models import User
from accounts.utils import create_role_profile
from intern_track.exceptions import InvalidTransitionError
from internships.models import Internship
from recruiters.models import RecruiterProfile
from students.models import SkillAssessment, StudentProfile
from students.utils import record_assessment
from . import lifecycle
from .models import Application


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
        'is_approved': True,
    }
    data.update(kwargs)
    return Internship.objects.create(recruiter=recruiter, **data)


class ApplicationTestCase(TestCase):
    def setUp(self):
        self.recruiter = make_user('rec', role=User.RECRUITER)
        self.student = make_user('stu')
        self.internship = make_internship(self.recruiter)

        self.client = APIClient()
        self.client.force_authenticate(user=self.student)

    def client_for(self, user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client

    def apply_url(self, internship=None):
        return f'/api/applications/internships/{(internship or self.internship).id}/apply'

    def make_application(self, student=None):
        return lifecycle.apply(student or self.student, self.internship.id, cover_letter='Hello')


class ApplyTestCase(ApplicationTestCase):
    def test_apply_updates_counters(self):
        StudentProfile.objects.filter(user=self.student).update(
            resume_url='/uploads/resumes/cv.pdf', resume_filename='cv.pdf'
        )
        response = self.client.post(self.apply_url(), {'cover_letter': 'Keen to join'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        application = response.data['application']
        self.assertEqual(application['status'], 'applied')
        self.assertEqual(application['recruiter'], self.recruiter.id)
        self.assertEqual(application['resume'], {'url': '/uploads/resumes/cv.pdf', 'filename': 'cv.pdf'})

        self.internship.refresh_from_db()
        self.assertEqual(self.internship.applications_count, 1)
        self.assertEqual(StudentProfile.objects.get(user=self.student).applications_count, 1)
        self.assertEqual(RecruiterProfile.objects.get(user=self.recruiter).applications_received, 1)

    def test_apply_with_explicit_resume(self):
        response = self.client.post(self.apply_url(), {
            'resume': {'url': '/uploads/resumes/other.pdf', 'filename': 'other.pdf'},
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['application']['resume']['filename'], 'other.pdf')

    def test_apply_twice_conflicts(self):
        self.client.post(self.apply_url(), {}, format='json')
        response = self.client.post(self.apply_url(), {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(Application.objects.count(), 1)

        self.internship.refresh_from_db()
        self.assertEqual(self.internship.applications_count, 1)

    def test_apply_to_missing_internship(self):
        response = self.client.post('/api/applications/internships/9999/apply', {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_apply_to_unapproved_internship(self):
        pending = make_internship(self.recruiter, is_approved=False)
        response = self.client.post(self.apply_url(pending), {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['message'], 'Internship is not available for applications')

    def test_apply_after_deadline(self):
        expired = make_internship(self.recruiter, application_deadline=timezone.now() - timedelta(hours=1))
        response = self.client.post(self.apply_url(expired), {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['message'], 'Application deadline has passed')

    def test_recruiter_cannot_apply(self):
        response = self.client_for(self.recruiter).post(self.apply_url(), {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_unauthenticated_apply(self):
        response = APIClient().post(self.apply_url(), {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class MyApplicationsTestCase(ApplicationTestCase):
    def test_lists_only_own_applications(self):
        self.make_application()
        self.make_application(make_user('someone'))

        response = self.client.get('/api/applications/my-applications')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['pagination']['total'], 1)
        self.assertEqual(response.data['results'][0]['student'], self.student.id)

    def test_status_filter(self):
        application = self.make_application()
        lifecycle.change_status(application, Application.SHORTLISTED, self.recruiter)

        response = self.client.get('/api/applications/my-applications', {'status': 'applied'})
        self.assertEqual(response.data['pagination']['total'], 0)
        response = self.client.get('/api/applications/my-applications', {'status': 'shortlisted'})
        self.assertEqual(response.data['pagination']['total'], 1)


class WithdrawTestCase(ApplicationTestCase):
    def test_withdraw_decrements_internship_count(self):
        application = self.make_application()
        response = self.client.put(f'/api/applications/{application.id}/withdraw')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['application']['status'], 'withdrawn')

        self.internship.refresh_from_db()
        self.assertEqual(self.internship.applications_count, 0)
        # the student's own total keeps the withdrawn application
        self.assertEqual(StudentProfile.objects.get(user=self.student).applications_count, 1)

    def test_withdraw_twice(self):
        application = self.make_application()
        self.client.put(f'/api/applications/{application.id}/withdraw')
        response = self.client.put(f'/api/applications/{application.id}/withdraw')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        self.internship.refresh_from_db()
        self.assertEqual(self.internship.applications_count, 0)

    def test_cannot_withdraw_selected(self):
        application = self.make_application()
        lifecycle.change_status(application, Application.SHORTLISTED, self.recruiter)
        lifecycle.change_status(application, Application.SELECTED, self.recruiter)

        response = self.client.put(f'/api/applications/{application.id}/withdraw')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['message'], 'Cannot withdraw a selected application')

    def test_other_student_gets_not_found(self):
        application = self.make_application()
        response = self.client_for(make_user('intruder')).put(f'/api/applications/{application.id}/withdraw')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_recruiter_cannot_withdraw(self):
        application = self.make_application()
        response = self.client_for(self.recruiter).put(f'/api/applications/{application.id}/withdraw')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class TransitionTestCase(ApplicationTestCase):
    def test_transition_table(self):
        self.assertTrue(lifecycle.can_transition('applied', 'shortlisted'))
        self.assertTrue(lifecycle.can_transition('shortlisted', 'selected'))
        self.assertFalse(lifecycle.can_transition('applied', 'selected'))
        self.assertFalse(lifecycle.can_transition('rejected', 'applied'))
        self.assertFalse(lifecycle.can_transition('interview', 'interview'))
        self.assertTrue(lifecycle.can_transition('interview', 'interview', reschedule=True))

    def test_full_path_updates_counters(self):
        application = self.make_application()
        lifecycle.change_status(application, Application.SHORTLISTED, self.recruiter)
        lifecycle.change_status(application, Application.INTERVIEW, self.recruiter)
        lifecycle.change_status(application, Application.SELECTED, self.recruiter, note='Great fit')

        application.refresh_from_db()
        self.assertEqual(application.status, Application.SELECTED)
        self.assertEqual(application.notes.get().content, 'Great fit')

        profile = StudentProfile.objects.get(user=self.student)
        self.assertEqual(profile.shortlisted_count, 1)
        self.assertEqual(profile.selected_count, 1)
        self.assertEqual(RecruiterProfile.objects.get(user=self.recruiter).candidates_hired, 1)

    def test_selected_is_terminal(self):
        application = self.make_application()
        lifecycle.change_status(application, Application.SHORTLISTED, self.recruiter)
        lifecycle.change_status(application, Application.SELECTED, self.recruiter)

        with self.assertRaises(InvalidTransitionError):
            lifecycle.change_status(application, Application.SELECTED, self.recruiter)
        with self.assertRaises(InvalidTransitionError):
            lifecycle.change_status(application, Application.REJECTED, self.recruiter)

        self.assertEqual(StudentProfile.objects.get(user=self.student).selected_count, 1)
        self.assertEqual(RecruiterProfile.objects.get(user=self.recruiter).candidates_hired, 1)

    def test_illegal_jump(self):
        application = self.make_application()
        with self.assertRaises(InvalidTransitionError):
            lifecycle.change_status(application, Application.SELECTED, self.recruiter)
        application.refresh_from_db()
        self.assertEqual(application.status, Application.APPLIED)

    def test_recruiter_cannot_withdraw_for_student(self):
        application = self.make_application()
        with self.assertRaises(InvalidTransitionError):
            lifecycle.change_status(application, Application.WITHDRAWN, self.recruiter)

    def test_schedule_and_reschedule_interview(self):
        application = self.make_application()
        lifecycle.schedule_interview(application, date(2030, 1, 15), time='10:00', interview_type='video')
        lifecycle.schedule_interview(application, date(2030, 1, 20), location='HQ')

        application.refresh_from_db()
        self.assertEqual(application.status, Application.INTERVIEW)
        self.assertEqual(application.interview_date, date(2030, 1, 20))
        self.assertEqual(application.interview_schedule['location'], 'HQ')

    def test_cannot_schedule_rejected(self):
        application = self.make_application()
        lifecycle.change_status(application, Application.REJECTED, self.recruiter)
        with self.assertRaises(InvalidTransitionError):
            lifecycle.schedule_interview(application, date(2030, 1, 15))


class DetailAndNotesTestCase(ApplicationTestCase):
    def setUp(self):
        super().setUp()
        self.application = self.make_application()
        self.url = f'/api/applications/{self.application.id}'

    def test_retrieve_by_parties(self):
        admin = make_user('admin', role=User.ADMIN)
        for user in (self.student, self.recruiter, admin):
            response = self.client_for(user).get(self.url)
            self.assertEqual(response.status_code, status.HTTP_200_OK)
            self.assertEqual(response.data['application']['id'], self.application.id)

    def test_retrieve_hidden_from_others(self):
        for user in (make_user('nosy'), make_user('rival', role=User.RECRUITER)):
            response = self.client_for(user).get(self.url)
            self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_student_adds_note(self):
        response = self.client.post(f'{self.url}/notes', {'content': 'Available from June'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['note']['author'], self.student.id)
        self.assertEqual(self.application.notes.count(), 1)

    def test_recruiter_records_feedback(self):
        response = self.client_for(self.recruiter).put(self.url, {
            'notes': 'Strong portfolio',
            'feedback': {'rating': 4, 'comments': 'Good communication'},
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        feedback = response.data['application']['feedback']
        self.assertEqual(feedback['rating'], 4)
        self.assertEqual(feedback['given_by'], self.recruiter.id)
        self.assertEqual(len(response.data['application']['notes']), 1)

    def test_update_requires_notes_or_feedback(self):
        response = self.client_for(self.recruiter).put(self.url, {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_feedback_rating_range(self):
        response = self.client_for(self.recruiter).put(self.url, {'feedback': {'rating': 9}}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_student_cannot_record_feedback(self):
        response = self.client.put(self.url, {'feedback': {'rating': 5}}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class StatsTestCase(ApplicationTestCase):
    def test_student_stats(self):
        self.make_application()
        other = make_internship(self.recruiter, title='Other')
        application = lifecycle.apply(self.student, other.id)
        lifecycle.change_status(application, Application.REJECTED, self.recruiter)

        response = self.client.get('/api/applications/stats/me')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        stats = response.data['stats']
        self.assertEqual(stats['total_applications'], 2)
        self.assertEqual(stats['status_stats'], {'applied': 1, 'rejected': 1})
        now = timezone.now()
        self.assertEqual(stats['monthly_applications'][0]['count'], 2)
        self.assertEqual(stats['monthly_applications'][0]['month'], now.month)

    def test_recruiter_stats_cover_their_postings(self):
        self.make_application()
        rival = make_user('rival', role=User.RECRUITER)
        lifecycle.apply(self.student, make_internship(rival).id)

        response = self.client_for(self.recruiter).get('/api/applications/stats/me')
        self.assertEqual(response.data['stats']['total_applications'], 1)


class RecomputeStatsTestCase(ApplicationTestCase):
    def test_command_restores_counters(self):
        application = self.make_application()
        lifecycle.change_status(application, Application.SHORTLISTED, self.recruiter)
        lifecycle.change_status(application, Application.SELECTED, self.recruiter)
        withdrawn = lifecycle.apply(self.student, make_internship(self.recruiter, title='Second').id)
        lifecycle.withdraw(withdrawn)

        Internship.objects.update(applications_count=7)
        StudentProfile.objects.filter(user=self.student).update(applications_count=0, selected_count=0)
        RecruiterProfile.objects.filter(user=self.recruiter).update(
            internships_posted=0, applications_received=0, candidates_hired=0
        )

        out = StringIO()
        call_command('recompute_stats', stdout=out)
        self.assertIn('Stats counters are up to date', out.getvalue())

        self.internship.refresh_from_db()
        self.assertEqual(self.internship.applications_count, 1)
        self.assertEqual(Internship.objects.get(title='Second').applications_count, 0)

        profile = StudentProfile.objects.get(user=self.student)
        self.assertEqual(profile.applications_count, 2)
        self.assertEqual(profile.selected_count, 1)

        recruiter_profile = RecruiterProfile.objects.get(user=self.recruiter)
        self.assertEqual(recruiter_profile.internships_posted, 2)
        self.assertEqual(recruiter_profile.applications_received, 2)
        self.assertEqual(recruiter_profile.candidates_hired, 1)

    def test_command_is_idempotent(self):
        self.make_application()
        call_command('recompute_stats', stdout=StringIO())
        out = StringIO()
        call_command('recompute_stats', stdout=out)
        self.assertIn('Updated 0 internships', out.getvalue())

    def test_assessed_skills_are_counted_case_insensitively(self):
        questions = [{'question': 'Pick b', 'options': ['a', 'b'], 'correct_answer': 1}]
        answers = [{'question_index': 0, 'selected_answer': 1, 'time_spent': 5}]
        record_assessment(self.student, 'SQL', questions, answers)
        record_assessment(self.student, 'sql', questions, answers)

        profile = StudentProfile.objects.get(user=self.student)
        self.assertEqual(profile.skills_assessed_count, 1)

        # rows written before names were canonicalised keep their own casing
        SkillAssessment.objects.filter(attempt_number=2).update(skill='sql')
        StudentProfile.objects.filter(pk=profile.pk).update(skills_assessed_count=5)
        call_command('recompute_stats', stdout=StringIO())

        profile.refresh_from_db()
        self.assertEqual(profile.skills_assessed_count, 1)
