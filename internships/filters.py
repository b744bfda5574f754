import json

from django.db import connection
from django.db.models import Q
from django_filters import rest_framework as filters

from .models import Internship


def skill_element(skill):
    """A skill as it appears, quoted, in the stored JSON text of a list."""
    # sqlite keeps the encoder's \u escapes; postgres and mysql render text as-is
    return json.dumps(skill, ensure_ascii=connection.vendor == 'sqlite')


def skills_query(skills):
    query = Q()
    for skill in skills:
        query |= Q(skills__icontains=skill_element(skill))
    return query


def any_skill(queryset, skills):
    """Keep internships listing at least one of the given skills."""
    return queryset.filter(skills_query(skills))


class InternshipFilter(filters.FilterSet):
    """Filter for the public internship list"""
    search = filters.CharFilter(method='filter_search')
    location = filters.CharFilter(lookup_expr='icontains')
    work_type = filters.ChoiceFilter(choices=Internship.WORK_TYPE_CHOICES)
    industry = filters.CharFilter(lookup_expr='icontains')
    skills = filters.CharFilter(method='filter_skills')
    is_paid = filters.BooleanFilter()

    class Meta:
        model = Internship
        fields = ['location', 'work_type', 'industry', 'is_paid']

    def filter_search(self, queryset, name, value):
        return queryset.filter(
            Q(title__icontains=value)
            | Q(description__icontains=value)
            | Q(company__icontains=value)
            | Q(skills__icontains=skill_element(value)[1:-1])
        )

    def filter_skills(self, queryset, name, value):
        skills = [s.strip() for s in value.split(',') if s.strip()]
        if not skills:
            return queryset
        return any_skill(queryset, skills)


class InternshipSearchFilter(InternshipFilter):
    """Advanced search: free-text keyword plus stipend, duration and remote filters"""
    keyword = filters.CharFilter(method='filter_search')
    stipend_min = filters.NumberFilter(field_name='stipend_min', lookup_expr='gte')
    stipend_max = filters.NumberFilter(field_name='stipend_max', lookup_expr='lte')
    duration = filters.CharFilter(lookup_expr='icontains')
    is_remote = filters.BooleanFilter(method='filter_is_remote')
    experience_level = filters.ChoiceFilter(choices=Internship.EXPERIENCE_LEVEL_CHOICES)

    class Meta(InternshipFilter.Meta):
        fields = InternshipFilter.Meta.fields + ['duration', 'experience_level']

    def filter_is_remote(self, queryset, name, value):
        if value:
            return queryset.filter(work_type__in=['remote', 'hybrid'])
        return queryset.filter(work_type='onsite')


class RecruiterInternshipFilter(filters.FilterSet):
    """Filter for a recruiter's own postings"""
    status = filters.ChoiceFilter(
        method='filter_status',
        choices=[('active', 'Active'), ('inactive', 'Inactive'), ('pending', 'Pending'), ('approved', 'Approved')],
    )
    search = filters.CharFilter(method='filter_search')

    class Meta:
        model = Internship
        fields = ['status']

    def filter_status(self, queryset, name, value):
        lookups = {
            'active': {'is_active': True},
            'inactive': {'is_active': False},
            'pending': {'is_approved': False},
            'approved': {'is_approved': True},
        }
        return queryset.filter(**lookups[value])

    def filter_search(self, queryset, name, value):
        return queryset.filter(
            Q(title__icontains=value) | Q(company__icontains=value) | Q(description__icontains=value)
        )


class AdminInternshipFilter(RecruiterInternshipFilter):
    """Moderation queue filter"""
    status = filters.ChoiceFilter(
        method='filter_status',
        choices=[('pending', 'Pending'), ('approved', 'Approved')],
    )
    company = filters.CharFilter(lookup_expr='icontains')

    class Meta(RecruiterInternshipFilter.Meta):
        fields = ['status', 'company']
