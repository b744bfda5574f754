from django.db.models import Q
from django_filters import rest_framework as filters

from accounts.models import User
from .models import AdminActivity


class StudentFilter(filters.FilterSet):
    """Filter for student queries"""
    search = filters.CharFilter(method='filter_search')
    skills = filters.CharFilter(method='filter_skills')
    location = filters.CharFilter(field_name='student_profile__location', lookup_expr='icontains')
    is_active = filters.BooleanFilter()
    joined_from = filters.DateFilter(field_name='date_joined', lookup_expr='date__gte')
    joined_to = filters.DateFilter(field_name='date_joined', lookup_expr='date__lte')

    class Meta:
        model = User
        fields = ['is_active']

    def filter_search(self, queryset, name, value):
        return queryset.filter(Q(username__icontains=value) | Q(email__icontains=value))

    def filter_skills(self, queryset, name, value):
        skills = [s.strip() for s in value.split(',') if s.strip()]
        if not skills:
            return queryset
        query = Q()
        for skill in skills:
            query |= Q(student_profile__skills__name__iexact=skill)
        return queryset.filter(query).distinct()


class AdminActivityFilter(filters.FilterSet):
    """Filter for admin activity logs"""
    action = filters.ChoiceFilter(choices=AdminActivity.ACTION_CHOICES)
    admin = filters.NumberFilter(field_name='admin__id')
    model_name = filters.CharFilter(lookup_expr='icontains')
    timestamp_from = filters.DateTimeFilter(field_name='timestamp', lookup_expr='gte')
    timestamp_to = filters.DateTimeFilter(field_name='timestamp', lookup_expr='lte')

    class Meta:
        model = AdminActivity
        fields = ['action', 'admin', 'model_name']
