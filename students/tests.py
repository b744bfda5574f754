import shutil
import tempfile

from django.core.files.uploadedfile import SimpleUploadedFile
from django.db import IntegrityError, transaction
from django.test import TestCase, override_settings
from rest_framework import status
from rest_framework.test import APIClient

from accounts.models import User
from accounts.utils import create_role_profile
from .models import Skill, SkillAssessment, StudentProfile
from .utils import proficiency_for_score


def make_user(username, role=User.STUDENT):
    user = User.objects.create_user(
        email=f'{username}@test.com', username=username, password='Secret123', role=role
    )
    create_role_profile(user)
    return user


def quiz(correct_count, total=4):
    questions = [
        {
            'question': f'Question {i}',
            'options': ['a', 'b', 'c', 'd'],
            'correct_answer': 1,
            'explanation': f'Topic {i}',
        }
        for i in range(total)
    ]
    answers = [
        {'question_index': i, 'selected_answer': 1 if i < correct_count else 0, 'time_spent': 10}
        for i in range(total)
    ]
    return questions, answers


class ProfileTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.student = make_user('sam')
        self.client.force_authenticate(user=self.student)

    def test_get_profile(self):
        response = self.client.get('/api/students/profile')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['profile']['username'], 'sam')
        self.assertEqual(response.data['profile']['stats']['applications_count'], 0)

    def test_update_profile_ignores_stats(self):
        response = self.client.put('/api/students/profile', {
            'first_name': 'Sam',
            'location': 'Lagos',
            'preferred_locations': ['Lagos', 'Remote'],
            'applications_count': 99,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        profile = StudentProfile.objects.get(user=self.student)
        self.assertEqual(profile.location, 'Lagos')
        self.assertEqual(profile.preferred_locations, ['Lagos', 'Remote'])
        self.assertEqual(profile.applications_count, 0)

    def test_unauthenticated(self):
        response = APIClient().get('/api/students/profile')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class SkillTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.student = make_user('sara')
        self.profile = self.student.student_profile
        self.client.force_authenticate(user=self.student)

    def test_add_skill_defaults(self):
        response = self.client.post('/api/students/skills', {'name': 'Python'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        skill = Skill.objects.get(profile=self.profile)
        self.assertEqual(skill.score, 0)
        self.assertIsNone(skill.last_assessed)

    def test_duplicate_skill_is_case_insensitive(self):
        Skill.objects.create(profile=self.profile, name='Python')
        response = self.client.post('/api/students/skills', {'name': 'python'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(self.profile.skills.count(), 1)

    def test_skill_names_are_unique_per_profile_in_the_database(self):
        Skill.objects.create(profile=self.profile, name='Python')
        with self.assertRaises(IntegrityError), transaction.atomic():
            Skill.objects.create(profile=self.profile, name='python')

        other = make_user('tom').student_profile
        Skill.objects.create(profile=other, name='python')
        self.assertEqual(Skill.objects.filter(name__iexact='python').count(), 2)

    def test_update_score_stamps_last_assessed(self):
        skill = Skill.objects.create(profile=self.profile, name='SQL')
        response = self.client.put(f'/api/students/skills/{skill.id}', {'score': 80}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        skill.refresh_from_db()
        self.assertEqual(skill.score, 80)
        self.assertIsNotNone(skill.last_assessed)

    def test_update_proficiency_only(self):
        skill = Skill.objects.create(profile=self.profile, name='SQL')
        response = self.client.put(f'/api/students/skills/{skill.id}', {'proficiency': 'advanced'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        skill.refresh_from_db()
        self.assertEqual(skill.proficiency, 'advanced')
        self.assertIsNone(skill.last_assessed)

    def test_score_out_of_range(self):
        skill = Skill.objects.create(profile=self.profile, name='SQL')
        response = self.client.put(f'/api/students/skills/{skill.id}', {'score': 150}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_remove_skill(self):
        skill = Skill.objects.create(profile=self.profile, name='Go')
        response = self.client.delete(f'/api/students/skills/{skill.id}')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Skill.objects.filter(pk=skill.pk).exists())

    def test_remove_missing_skill(self):
        response = self.client.delete('/api/students/skills/9999')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_cannot_touch_another_students_skill(self):
        other = make_user('other')
        skill = Skill.objects.create(profile=other.student_profile, name='Rust')
        response = self.client.delete(f'/api/students/skills/{skill.id}')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertTrue(Skill.objects.filter(pk=skill.pk).exists())

    def test_recruiter_endorses_skill(self):
        skill = Skill.objects.create(profile=self.profile, name='Django')
        recruiter = make_user('rita', role=User.RECRUITER)

        client = APIClient()
        client.force_authenticate(user=recruiter)
        response = client.post(f'/api/students/skills/{skill.id}/endorse')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['endorsements_count'], 1)

        # endorsing twice does not double count
        client.post(f'/api/students/skills/{skill.id}/endorse')
        self.assertEqual(skill.endorsements.count(), 1)

    def test_student_cannot_endorse(self):
        skill = Skill.objects.create(profile=self.profile, name='Django')
        response = self.client.post(f'/api/students/skills/{skill.id}/endorse')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class ProfileCollectionsTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.student = make_user('tom')
        self.client.force_authenticate(user=self.student)

    def test_education_crud(self):
        response = self.client.post('/api/students/education', {
            'institution': 'State University',
            'degree': 'BSc',
            'field': 'Computer Science',
            'start_date': '2021-09-01',
            'gpa': 3.5,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        education_id = response.data['id']

        response = self.client.get('/api/students/education')
        self.assertEqual(len(response.data), 1)

        response = self.client.patch(f'/api/students/education/{education_id}', {'current': True}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['current'])

        response = self.client.delete(f'/api/students/education/{education_id}')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

    def test_experience_end_before_start(self):
        response = self.client.post('/api/students/experience', {
            'company': 'Acme',
            'position': 'Intern',
            'start_date': '2023-06-01',
            'end_date': '2023-01-01',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('end_date', response.data['errors'])

    def test_portfolio_item(self):
        response = self.client.post('/api/students/portfolio', {
            'title': 'Tracker',
            'url': 'https://example.com/tracker',
            'technologies': ['Django', 'React'],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['technologies'], ['Django', 'React'])


class AssessmentTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.student = make_user('uma')
        self.profile = self.student.student_profile
        self.client.force_authenticate(user=self.student)

    def submit(self, skill, correct_count, total=4):
        questions, answers = quiz(correct_count, total)
        return self.client.post('/api/students/assessments', {
            'skill': skill,
            'questions': questions,
            'answers': answers,
        }, format='json')

    def test_proficiency_thresholds(self):
        self.assertEqual(proficiency_for_score(95), 'expert')
        self.assertEqual(proficiency_for_score(90), 'expert')
        self.assertEqual(proficiency_for_score(70), 'advanced')
        self.assertEqual(proficiency_for_score(40), 'intermediate')
        self.assertEqual(proficiency_for_score(39), 'beginner')

    def test_record_assessment_grades_and_updates_skill(self):
        response = self.submit('JavaScript', 3)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['score'], 75)
        self.assertEqual(response.data['correct_answers'], 3)
        self.assertEqual(response.data['proficiency_level'], 'advanced')
        self.assertEqual(response.data['attempt_number'], 1)
        self.assertEqual(response.data['time_taken'], 40)
        self.assertIsNotNone(response.data['next_assessment_date'])
        self.assertIn('Review: Topic 3', response.data['recommendations'])

        skill = Skill.objects.get(profile=self.profile, name='JavaScript')
        self.assertEqual(skill.score, 75)
        self.assertEqual(skill.proficiency, 'advanced')
        self.assertIsNotNone(skill.last_assessed)

        self.profile.refresh_from_db()
        self.assertEqual(self.profile.skills_assessed_count, 1)

    def test_attempt_numbers_increase_per_skill(self):
        Skill.objects.create(profile=self.profile, name='SQL')
        self.submit('SQL', 1)
        response = self.submit('SQL', 4)
        self.assertEqual(response.data['attempt_number'], 2)
        self.assertEqual(response.data['proficiency_level'], 'expert')

        response = self.submit('Python', 2)
        self.assertEqual(response.data['attempt_number'], 1)

        self.profile.refresh_from_db()
        # counted once per skill, not per attempt
        self.assertEqual(self.profile.skills_assessed_count, 2)
        self.assertEqual(self.profile.skills.get(name='SQL').score, 100)

    def test_answer_index_out_of_range(self):
        questions, _ = quiz(0, 2)
        response = self.client.post('/api/students/assessments', {
            'skill': 'SQL',
            'questions': questions,
            'answers': [{'question_index': 5, 'selected_answer': 1}],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(SkillAssessment.objects.exists())

    def test_answering_a_question_twice_is_rejected(self):
        skill = Skill.objects.create(profile=self.profile, name='SQL', score=20)
        questions, _ = quiz(0, 2)
        response = self.client.post('/api/students/assessments', {
            'skill': 'SQL',
            'questions': questions,
            'answers': [
                {'question_index': 0, 'selected_answer': 1},
                {'question_index': 0, 'selected_answer': 1},
                {'question_index': 0, 'selected_answer': 1},
            ],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('answers', response.data['errors'])
        self.assertFalse(SkillAssessment.objects.exists())

        skill.refresh_from_db()
        self.assertEqual(skill.score, 20)
        self.assertIsNone(skill.last_assessed)

    def test_attempts_use_the_profile_spelling_of_a_skill(self):
        Skill.objects.create(profile=self.profile, name='SQL')
        self.submit('SQL', 1)
        response = self.submit('sql', 3)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['skill'], 'SQL')
        self.assertEqual(response.data['attempt_number'], 2)

        self.assertEqual(self.profile.skills.count(), 1)
        self.profile.refresh_from_db()
        self.assertEqual(self.profile.skills_assessed_count, 1)

    def test_list_assessments_newest_first(self):
        self.submit('SQL', 1)
        self.submit('Python', 2)
        response = self.client.get('/api/students/assessments')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([a['skill'] for a in response.data], ['Python', 'SQL'])

    def test_stats_recomputed_from_rows(self):
        Skill.objects.create(profile=self.profile, name='Go', score=60)
        self.submit('SQL', 2)
        response = self.client.get('/api/students/stats')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        stats = response.data['stats']
        self.assertEqual(stats['total_skills'], 2)
        self.assertEqual(stats['assessed_skills'], 1)
        self.assertEqual(stats['total_assessments'], 1)
        self.assertEqual(stats['average_assessment_score'], 50)
        self.assertEqual(stats['total_applications'], 0)


class ResumeUploadTestCase(TestCase):
    def setUp(self):
        self.media_root = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.media_root, ignore_errors=True)
        self.client = APIClient()
        self.student = make_user('vic')
        self.client.force_authenticate(user=self.student)

    def upload(self, name, content=b'%PDF-1.4 resume'):
        resume = SimpleUploadedFile(name, content, content_type='application/pdf')
        return self.client.post('/api/upload/resume', {'resume': resume}, format='multipart')

    def test_upload_records_resume_on_profile(self):
        with override_settings(MEDIA_ROOT=self.media_root):
            response = self.upload('cv.pdf')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['resume']['filename'].endswith('.pdf'))

        profile = StudentProfile.objects.get(user=self.student)
        self.assertEqual(profile.resume_url, response.data['resume']['url'])
        self.assertIsNotNone(profile.resume_uploaded_at)

    def test_rejects_other_file_types(self):
        with override_settings(MEDIA_ROOT=self.media_root):
            response = self.upload('cv.exe')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_rejects_large_files(self):
        with override_settings(MEDIA_ROOT=self.media_root, RESUME_MAX_BYTES=10):
            response = self.upload('cv.pdf', b'x' * 100)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_missing_file(self):
        response = self.client.post('/api/upload/resume', {}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
