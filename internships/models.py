from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


class InternshipQuerySet(models.QuerySet):
    def public(self):
        """Active, approved and still open for applications."""
        return self.filter(is_active=True, is_approved=True, application_deadline__gt=timezone.now())

    def listed(self):
        """Active and approved, whatever the deadline."""
        return self.filter(is_active=True, is_approved=True)


class Internship(models.Model):
    WORK_TYPE_CHOICES = [
        ("onsite", "Onsite"),
        ("remote", "Remote"),
        ("hybrid", "Hybrid"),
    ]

    EXPERIENCE_LEVEL_CHOICES = [
        ("entry-level", "Entry level"),
        ("intermediate", "Intermediate"),
        ("advanced", "Advanced"),
    ]

    recruiter = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="internships"
    )
    title = models.CharField(max_length=100)
    company = models.CharField(max_length=100, db_index=True)
    description = models.TextField(max_length=2000)
    requirements = models.JSONField(default=list, blank=True)
    responsibilities = models.JSONField(default=list, blank=True)
    skills = models.JSONField(default=list, blank=True)
    tags = models.JSONField(default=list, blank=True)

    location = models.CharField(max_length=100, db_index=True)
    work_type = models.CharField(max_length=10, choices=WORK_TYPE_CHOICES)
    duration = models.CharField(max_length=50)
    start_date = models.DateField()
    end_date = models.DateField(null=True, blank=True)

    stipend = models.CharField(max_length=100, blank=True, default="")
    stipend_min = models.PositiveIntegerField(null=True, blank=True)
    stipend_max = models.PositiveIntegerField(null=True, blank=True)
    stipend_currency = models.CharField(max_length=3, default="USD")
    is_paid = models.BooleanField(default=False)

    industry = models.CharField(max_length=100, db_index=True)
    application_deadline = models.DateTimeField(db_index=True)
    openings = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    experience_level = models.CharField(
        max_length=20, choices=EXPERIENCE_LEVEL_CHOICES, default="entry-level"
    )
    company_logo = models.CharField(max_length=500, blank=True, default="")
    company_website = models.URLField(blank=True, default="")

    # moderation
    is_active = models.BooleanField(default=True)
    is_approved = models.BooleanField(default=False)
    rejection_reason = models.TextField(blank=True, default="")

    posted_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)
    views = models.PositiveIntegerField(default=0)
    applications_count = models.PositiveIntegerField(default=0)

    objects = InternshipQuerySet.as_manager()

    class Meta:
        ordering = ["-posted_at"]

    def __str__(self):
        return f"{self.title} at {self.company}"

    @property
    def is_expired(self):
        return timezone.now() >= self.application_deadline

    @property
    def is_public(self):
        return self.is_active and self.is_approved and not self.is_expired

    @property
    def days_until_deadline(self):
        return (self.application_deadline - timezone.now()).days
