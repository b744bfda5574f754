from django.db.models import Q
from django_filters import rest_framework as filters

from applications.models import Application
from .models import RecruiterProfile


class ReceivedApplicationFilter(filters.FilterSet):
    """Filter for applications a recruiter has received"""
    status = filters.ChoiceFilter(choices=Application.STATUS_CHOICES)
    internship = filters.NumberFilter(field_name='internship__id')

    class Meta:
        model = Application
        fields = ['status', 'internship']


class RecruiterProfileFilter(filters.FilterSet):
    """Filter for the admin recruiter list"""
    search = filters.CharFilter(method='filter_search')
    company = filters.CharFilter(lookup_expr='icontains')
    is_verified = filters.BooleanFilter()

    class Meta:
        model = RecruiterProfile
        fields = ['company', 'is_verified']

    def filter_search(self, queryset, name, value):
        return queryset.filter(
            Q(user__username__icontains=value)
            | Q(user__email__icontains=value)
            | Q(first_name__icontains=value)
            | Q(last_name__icontains=value)
            | Q(company__icontains=value)
        )
