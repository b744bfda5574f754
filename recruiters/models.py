from django.conf import settings
from django.db import models


class RecruiterProfile(models.Model):
    COMPANY_SIZE_CHOICES = [
        ('1-10', '1-10'),
        ('11-50', '11-50'),
        ('51-200', '51-200'),
        ('201-500', '201-500'),
        ('501-1000', '501-1000'),
        ('1000+', '1000+'),
    ]

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='recruiter_profile'
    )
    first_name = models.CharField(max_length=50, blank=True, default='')
    last_name = models.CharField(max_length=50, blank=True, default='')
    company = models.CharField(max_length=100, blank=True, default='', db_index=True)
    position = models.CharField(max_length=100, blank=True, default='')
    phone = models.CharField(max_length=20, blank=True, default='')
    location = models.CharField(max_length=100, blank=True, default='')
    bio = models.TextField(max_length=500, blank=True, default='')
    avatar = models.CharField(max_length=500, blank=True, default='')
    company_logo = models.CharField(max_length=500, blank=True, default='')
    company_website = models.URLField(blank=True, default='')
    company_size = models.CharField(max_length=10, choices=COMPANY_SIZE_CHOICES, blank=True, default='')
    industry = models.CharField(max_length=100, blank=True, default='', db_index=True)
    linkedin = models.URLField(blank=True, default='')
    website = models.URLField(blank=True, default='')

    # set by admins only
    is_verified = models.BooleanField(default=False)

    internships_posted = models.PositiveIntegerField(default=0)
    applications_received = models.PositiveIntegerField(default=0)
    candidates_hired = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.full_name.strip() or self.user.username} ({self.company})"

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"

    @property
    def stats(self):
        return {
            'internships_posted': self.internships_posted,
            'applications_received': self.applications_received,
            'candidates_hired': self.candidates_hired,
        }
