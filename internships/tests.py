from datetime import date, timedelta

from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from accounts.models import User
from .models import Internship


def make_internship(recruiter, **kwargs):
    data = {
        'title': 'Backend Intern',
        'company': 'Acme',
        'description': 'Build APIs',
        'location': 'Lagos',
        'work_type': 'onsite',
        'duration': '3 months',
        'start_date': date.today() + timedelta(days=30),
        'industry': 'Technology',
        'application_deadline': timezone.now() + timedelta(days=10),
        'skills': ['Python', 'Django'],
        'is_approved': True,
    }
    data.update(kwargs)
    return Internship.objects.create(recruiter=recruiter, **data)


class InternshipVisibilityTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.recruiter = User.objects.create_user(
            email='rec@test.com', username='rec', password='Secret123', role=User.RECRUITER
        )
        self.open = make_internship(self.recruiter, title='Open')
        self.expired = make_internship(
            self.recruiter, title='Expired', application_deadline=timezone.now() - timedelta(days=1)
        )
        self.pending = make_internship(self.recruiter, title='Pending', is_approved=False)
        self.closed = make_internship(self.recruiter, title='Closed', is_active=False)

    def test_list_only_public(self):
        response = self.client.get('/api/internships')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        titles = [item['title'] for item in response.data['results']]
        self.assertEqual(titles, ['Open'])
        self.assertEqual(response.data['pagination']['total'], 1)

    def test_list_with_trailing_slash(self):
        response = self.client.get('/api/internships/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['pagination']['total'], 1)

    def test_detail_counts_views(self):
        response = self.client.get(f'/api/internships/{self.open.id}')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['internship']['views'], 1)

        self.client.get(f'/api/internships/{self.open.id}')
        self.open.refresh_from_db()
        self.assertEqual(self.open.views, 2)

    def test_detail_hidden_for_non_public(self):
        for internship in (self.expired, self.pending, self.closed):
            response = self.client.get(f'/api/internships/{internship.id}')
            self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
            internship.refresh_from_db()
            self.assertEqual(internship.views, 0)

    def test_model_properties(self):
        self.assertTrue(self.open.is_public)
        self.assertTrue(self.expired.is_expired)
        self.assertFalse(self.pending.is_public)
        self.assertGreaterEqual(self.open.days_until_deadline, 9)


class InternshipFilterTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        recruiter = User.objects.create_user(
            email='rec@test.com', username='rec', password='Secret123', role=User.RECRUITER
        )
        self.python = make_internship(
            recruiter, title='Python Intern', skills=['Python'], stipend_min=100, stipend_max=300,
            is_paid=True, duration='6 months',
        )
        self.design = make_internship(
            recruiter, title='Design Intern', company='Pixel', skills=['Figma'], location='Abuja',
            work_type='remote', industry='Design', experience_level='intermediate',
        )
        self.data = make_internship(
            recruiter, title='Data Intern', skills=['SQL', 'Python'], work_type='hybrid',
            stipend_min=500, stipend_max=800, is_paid=True,
        )

    def titles(self, response):
        return {item['title'] for item in response.data['results']}

    def test_filter_by_location_and_work_type(self):
        response = self.client.get('/api/internships', {'location': 'abuja'})
        self.assertEqual(self.titles(response), {'Design Intern'})

        response = self.client.get('/api/internships', {'work_type': 'hybrid'})
        self.assertEqual(self.titles(response), {'Data Intern'})

    def test_filter_by_any_skill(self):
        response = self.client.get('/api/internships', {'skills': 'Figma,SQL'})
        self.assertEqual(self.titles(response), {'Design Intern', 'Data Intern'})

    def test_filter_by_non_ascii_skill(self):
        make_internship(self.python.recruiter, title='Lyon Intern', skills=['Développement web', 'Python'])

        response = self.client.get('/api/internships', {'skills': 'développement web'})
        self.assertEqual(self.titles(response), {'Lyon Intern'})

        response = self.client.get('/api/internships', {'search': 'Développement'})
        self.assertEqual(self.titles(response), {'Lyon Intern'})

    def test_free_text_search(self):
        response = self.client.get('/api/internships', {'search': 'pixel'})
        self.assertEqual(self.titles(response), {'Design Intern'})

    def test_paid_filter(self):
        response = self.client.get('/api/internships', {'is_paid': 'true'})
        self.assertEqual(self.titles(response), {'Python Intern', 'Data Intern'})

    def test_sort_by_whitelisted_field(self):
        response = self.client.get('/api/internships', {'sort_by': 'title', 'sort_order': 'asc'})
        titles = [item['title'] for item in response.data['results']]
        self.assertEqual(titles, ['Data Intern', 'Design Intern', 'Python Intern'])

    def test_unknown_sort_field_falls_back(self):
        response = self.client.get('/api/internships', {'sort_by': 'recruiter__password'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['results']), 3)

    def test_pagination_limit(self):
        response = self.client.get('/api/internships', {'limit': 2, 'page': 2})
        self.assertEqual(len(response.data['results']), 1)
        self.assertEqual(response.data['pagination']['pages'], 2)

    def test_search_endpoint(self):
        response = self.client.get('/api/internships/search', {'keyword': 'intern', 'is_remote': 'true'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(self.titles(response), {'Design Intern', 'Data Intern'})

        response = self.client.get('/api/internships/search', {'stipend_min': 200})
        self.assertEqual(self.titles(response), {'Data Intern'})

        response = self.client.get('/api/internships/search', {'duration': '6 months'})
        self.assertEqual(self.titles(response), {'Python Intern'})

        response = self.client.get('/api/internships/search', {'experience_level': 'intermediate'})
        self.assertEqual(self.titles(response), {'Design Intern'})


class InternshipDiscoveryTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        recruiter = User.objects.create_user(
            email='rec@test.com', username='rec', password='Secret123', role=User.RECRUITER
        )
        self.popular = make_internship(recruiter, title='Popular', views=50)
        self.quiet = make_internship(recruiter, title='Quiet', location='Accra', industry='Finance', skills=['Excel'])
        self.related = make_internship(
            recruiter, title='Related', location='Nairobi', industry='Health', skills=['Django']
        )
        make_internship(recruiter, title='Hidden', is_approved=False, views=100)

    def test_featured_orders_by_views(self):
        response = self.client.get('/api/internships/featured', {'limit': 2})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        titles = [item['title'] for item in response.data['internships']]
        self.assertEqual(len(titles), 2)
        self.assertEqual(titles[0], 'Popular')

    def test_stats(self):
        response = self.client.get('/api/internships/stats')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        stats = response.data['stats']
        self.assertEqual(stats['total_internships'], 3)
        self.assertEqual(stats['active_internships'], 3)
        self.assertIn({'name': 'Technology', 'count': 1}, stats['top_industries'])
        self.assertIn({'name': 'Lagos', 'count': 1}, stats['top_locations'])

    def test_similar_matches_industry_location_or_skill(self):
        response = self.client.get(f'/api/internships/{self.popular.id}/similar')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        titles = {item['title'] for item in response.data['internships']}
        # Related shares the Django skill, Quiet shares nothing
        self.assertEqual(titles, {'Related'})

    def test_similar_matches_non_ascii_skill(self):
        recruiter = self.popular.recruiter
        base = make_internship(
            recruiter, title='Paris', location='Paris', industry='Media', skills=['Rédaction'],
        )
        make_internship(recruiter, title='Berlin', location='Berlin', industry='Retail', skills=['Rédaction'])

        response = self.client.get(f'/api/internships/{base.id}/similar')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        titles = {item['title'] for item in response.data['internships']}
        self.assertEqual(titles, {'Berlin'})
