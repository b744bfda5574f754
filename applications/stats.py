from django.db.models import Count, Q
from django.db.models.functions import Lower, TruncMonth

from internships.models import Internship
from recruiters.models import RecruiterProfile
from students.models import StudentProfile
from .models import Application


def scoped_applications(user):
    """Applications a user may aggregate over: their own, their postings', or all for admins."""
    if user.is_student:
        return Application.objects.filter(student=user)
    if user.is_recruiter:
        return Application.objects.filter(internship__recruiter=user)
    return Application.objects.all()


def status_breakdown(queryset):
    rows = queryset.values('status').annotate(count=Count('id')).order_by('status')
    return {row['status']: row['count'] for row in rows}


def monthly_counts(queryset, months=12):
    """Latest `months` year/month buckets, newest first."""
    rows = (
        queryset.annotate(month=TruncMonth('applied_at'))
        .values('month')
        .annotate(count=Count('id'))
        .order_by('-month')[:months]
    )
    return [
        {'year': row['month'].year, 'month': row['month'].month, 'count': row['count']}
        for row in rows
    ]


def application_stats(queryset):
    return {
        'total_applications': queryset.count(),
        'status_stats': status_breakdown(queryset),
        'monthly_applications': monthly_counts(queryset),
    }


def recompute_counters():
    """
    Rebuild every stored counter from source rows. Safe to run repeatedly.
    Returns the number of rows of each kind that changed.
    """
    changed = {'internships': 0, 'students': 0, 'recruiters': 0}

    live = Q(applications__status__in=[
        value for value, _ in Application.STATUS_CHOICES if value != Application.WITHDRAWN
    ])
    for internship in Internship.objects.annotate(live_count=Count('applications', filter=live)):
        if internship.applications_count != internship.live_count:
            Internship.objects.filter(pk=internship.pk).update(applications_count=internship.live_count)
            changed['internships'] += 1

    students = StudentProfile.objects.annotate(
        total=Count('user__applications', distinct=True),
        shortlisted=Count(
            'user__applications', distinct=True,
            filter=Q(user__applications__status=Application.SHORTLISTED),
        ),
        selected=Count(
            'user__applications', distinct=True,
            filter=Q(user__applications__status=Application.SELECTED),
        ),
        # skill names compare case-insensitively, as in record_assessment
        assessed=Count(Lower('user__skill_assessments__skill'), distinct=True),
    )
    for profile in students:
        values = {
            'applications_count': profile.total,
            'selected_count': profile.selected,
            'skills_assessed_count': profile.assessed,
        }
        # past shortlistings leave no trace once an application moves on, so only raise it
        if profile.shortlisted > profile.shortlisted_count:
            values['shortlisted_count'] = profile.shortlisted
        if any(getattr(profile, field) != value for field, value in values.items()):
            StudentProfile.objects.filter(pk=profile.pk).update(**values)
            changed['students'] += 1

    recruiters = RecruiterProfile.objects.annotate(
        posted=Count('user__internships', distinct=True),
        received=Count('user__internships__applications', distinct=True),
        hired=Count(
            'user__internships__applications', distinct=True,
            filter=Q(user__internships__applications__status=Application.SELECTED),
        ),
    )
    for profile in recruiters:
        values = {
            'internships_posted': profile.posted,
            'applications_received': profile.received,
            'candidates_hired': profile.hired,
        }
        if any(getattr(profile, field) != value for field, value in values.items()):
            RecruiterProfile.objects.filter(pk=profile.pk).update(**values)
            changed['recruiters'] += 1

    return changed
