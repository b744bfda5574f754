from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
from django.db.models.functions import Lower


PROFICIENCY_CHOICES = [
    ('beginner', 'Beginner'),
    ('intermediate', 'Intermediate'),
    ('advanced', 'Advanced'),
    ('expert', 'Expert'),
]


class StudentProfile(models.Model):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='student_profile'
    )
    first_name = models.CharField(max_length=50, blank=True, default='')
    last_name = models.CharField(max_length=50, blank=True, default='')
    phone = models.CharField(max_length=20, blank=True, default='')
    location = models.CharField(max_length=100, blank=True, default='', db_index=True)
    bio = models.TextField(max_length=500, blank=True, default='')
    avatar = models.CharField(max_length=500, blank=True, default='')

    # resume reference returned by the upload store
    resume_url = models.CharField(max_length=500, blank=True, default='')
    resume_filename = models.CharField(max_length=255, blank=True, default='')
    resume_uploaded_at = models.DateTimeField(null=True, blank=True)

    linkedin = models.URLField(blank=True, default='')
    github = models.URLField(blank=True, default='')
    website = models.URLField(blank=True, default='')

    preferred_job_types = models.JSONField(default=list, blank=True)
    preferred_locations = models.JSONField(default=list, blank=True)
    preferred_industries = models.JSONField(default=list, blank=True)

    # stats block, kept in step with application and assessment writes
    applications_count = models.PositiveIntegerField(default=0)
    shortlisted_count = models.PositiveIntegerField(default=0)
    selected_count = models.PositiveIntegerField(default=0)
    skills_assessed_count = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.full_name.strip() or self.user.username

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"

    @property
    def stats(self):
        return {
            'applications_count': self.applications_count,
            'shortlisted_count': self.shortlisted_count,
            'selected_count': self.selected_count,
            'skills_assessed_count': self.skills_assessed_count,
        }


class Skill(models.Model):
    profile = models.ForeignKey(StudentProfile, on_delete=models.CASCADE, related_name='skills')
    name = models.CharField(max_length=100, db_index=True)
    proficiency = models.CharField(max_length=20, choices=PROFICIENCY_CHOICES, default='beginner')
    score = models.PositiveSmallIntegerField(
        default=0, validators=[MinValueValidator(0), MaxValueValidator(100)]
    )
    last_assessed = models.DateTimeField(null=True, blank=True)
    endorsements = models.ManyToManyField(
        settings.AUTH_USER_MODEL, related_name='endorsed_skills', blank=True
    )

    class Meta:
        ordering = ['id']
        constraints = [
            models.UniqueConstraint(Lower('name'), 'profile', name='unique_skill_name_per_profile'),
        ]

    def __str__(self):
        return f"{self.name} ({self.proficiency})"


class Education(models.Model):
    profile = models.ForeignKey(StudentProfile, on_delete=models.CASCADE, related_name='education')
    institution = models.CharField(max_length=200)
    degree = models.CharField(max_length=200)
    field = models.CharField(max_length=200)
    start_date = models.DateField()
    end_date = models.DateField(null=True, blank=True)
    current = models.BooleanField(default=False)
    gpa = models.FloatField(
        null=True, blank=True, validators=[MinValueValidator(0), MaxValueValidator(4)]
    )

    class Meta:
        ordering = ['-start_date']
        verbose_name_plural = "Education"

    def __str__(self):
        return f"{self.degree} - {self.institution}"


class Experience(models.Model):
    profile = models.ForeignKey(StudentProfile, on_delete=models.CASCADE, related_name='experience')
    company = models.CharField(max_length=200)
    position = models.CharField(max_length=200)
    start_date = models.DateField()
    end_date = models.DateField(null=True, blank=True)
    current = models.BooleanField(default=False)
    description = models.TextField(blank=True, default='')

    class Meta:
        ordering = ['-start_date']
        verbose_name_plural = "Experience"

    def __str__(self):
        return f"{self.position} at {self.company}"


class PortfolioItem(models.Model):
    profile = models.ForeignKey(StudentProfile, on_delete=models.CASCADE, related_name='portfolio')
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True, default='')
    url = models.URLField(blank=True, default='')
    technologies = models.JSONField(default=list, blank=True)

    class Meta:
        ordering = ['id']

    def __str__(self):
        return self.title


class SkillAssessment(models.Model):
    """One completed quiz attempt. Rows are written once and never updated."""
    student = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='skill_assessments'
    )
    skill = models.CharField(max_length=100, db_index=True)
    questions = models.JSONField(default=list)
    answers = models.JSONField(default=list)
    score = models.PositiveSmallIntegerField(validators=[MinValueValidator(0), MaxValueValidator(100)])
    total_questions = models.PositiveIntegerField()
    correct_answers = models.PositiveIntegerField()
    time_taken = models.PositiveIntegerField(help_text="Seconds")
    started_at = models.DateTimeField()
    completed_at = models.DateTimeField()
    proficiency_level = models.CharField(max_length=20, choices=PROFICIENCY_CHOICES)
    recommendations = models.JSONField(default=list, blank=True)
    next_assessment_date = models.DateTimeField(null=True, blank=True)
    attempt_number = models.PositiveIntegerField(default=1)

    class Meta:
        ordering = ['-completed_at']

    def __str__(self):
        return f"{self.student} - {self.skill} - {self.score}%"

    @property
    def duration_in_minutes(self):
        return round(self.time_taken / 60)

    @property
    def accuracy_percentage(self):
        if not self.total_questions:
            return 0
        return round(self.correct_answers / self.total_questions * 100)
