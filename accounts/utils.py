import re

from rest_framework import serializers

USERNAME_RE = re.compile(r'^[a-zA-Z0-9_]+$')
PASSWORD_RE = re.compile(r'^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)')


def check_password_strength(value):
    if len(value) < 6:
        raise serializers.ValidationError("Password must be at least 6 characters long")
    if not PASSWORD_RE.match(value):
        raise serializers.ValidationError(
            "Password must contain at least one lowercase letter, one uppercase letter, and one number"
        )
    return value


def create_role_profile(user, first_name='', last_name=''):
    """Create the empty profile that matches the user's role. Admins get none."""
    # Import here to avoid circular dependency
    from students.models import StudentProfile
    from recruiters.models import RecruiterProfile

    if user.is_student:
        return StudentProfile.objects.create(user=user, first_name=first_name, last_name=last_name)
    if user.is_recruiter:
        return RecruiterProfile.objects.create(user=user, first_name=first_name, last_name=last_name)
    return None
