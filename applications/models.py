from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
from django.utils import timezone


class Application(models.Model):
    APPLIED = 'applied'
    SHORTLISTED = 'shortlisted'
    INTERVIEW = 'interview'
    SELECTED = 'selected'
    REJECTED = 'rejected'
    WITHDRAWN = 'withdrawn'

    STATUS_CHOICES = [
        (APPLIED, 'Applied'),
        (SHORTLISTED, 'Shortlisted'),
        (INTERVIEW, 'Interview'),
        (SELECTED, 'Selected'),
        (REJECTED, 'Rejected'),
        (WITHDRAWN, 'Withdrawn'),
    ]

    INTERVIEW_TYPE_CHOICES = [
        ('phone', 'Phone'),
        ('video', 'Video'),
        ('onsite', 'Onsite'),
    ]

    student = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='applications'
    )
    internship = models.ForeignKey(
        'internships.Internship', on_delete=models.CASCADE, related_name='applications'
    )
    # copied from the internship when the application is created
    recruiter = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='received_applications'
    )
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=APPLIED, db_index=True)
    cover_letter = models.TextField(max_length=1000, blank=True, default='')

    # resume snapshot taken at apply time
    resume_url = models.CharField(max_length=500, blank=True, default='')
    resume_filename = models.CharField(max_length=255, blank=True, default='')

    applied_at = models.DateTimeField(default=timezone.now, db_index=True)
    last_updated = models.DateTimeField(default=timezone.now)

    interview_date = models.DateField(null=True, blank=True)
    interview_time = models.CharField(max_length=20, blank=True, default='')
    interview_location = models.CharField(max_length=255, blank=True, default='')
    interview_type = models.CharField(max_length=10, choices=INTERVIEW_TYPE_CHOICES, blank=True, default='')
    interview_notes = models.TextField(blank=True, default='')

    feedback_rating = models.PositiveSmallIntegerField(
        null=True, blank=True, validators=[MinValueValidator(1), MaxValueValidator(5)]
    )
    feedback_comments = models.TextField(blank=True, default='')
    feedback_given_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL,
        related_name='feedback_given',
    )
    feedback_given_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ['-applied_at']
        unique_together = ('student', 'internship')

    def __str__(self):
        return f"{self.student} → {self.internship} ({self.status})"

    @property
    def days_since_applied(self):
        return (timezone.now() - self.applied_at).days

    @property
    def interview_schedule(self):
        if not self.interview_date:
            return None
        return {
            'date': self.interview_date,
            'time': self.interview_time,
            'location': self.interview_location,
            'type': self.interview_type,
            'notes': self.interview_notes,
        }

    @property
    def feedback(self):
        if self.feedback_rating is None and not self.feedback_comments:
            return None
        return {
            'rating': self.feedback_rating,
            'comments': self.feedback_comments,
            'given_by': self.feedback_given_by_id,
            'given_at': self.feedback_given_at,
        }


class ApplicationNote(models.Model):
    """Append-only note left on an application by any party to it."""
    application = models.ForeignKey(Application, on_delete=models.CASCADE, related_name='notes')
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL, null=True, on_delete=models.SET_NULL, related_name='application_notes'
    )
    content = models.TextField(max_length=1000)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['created_at', 'id']

    def __str__(self):
        return f"Note by {self.author} on #{self.application_id}"
