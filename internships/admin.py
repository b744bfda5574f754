from django.contrib import admin
from .models import Internship

@admin.register(Internship)
class InternshipAdmin(admin.ModelAdmin):
    list_display = ("title", "company", "recruiter", "location", "work_type", "is_active", "is_approved", "application_deadline", "posted_at")
    list_filter = ("is_active", "is_approved", "work_type", "experience_level", "posted_at")
    search_fields = ("title", "company", "recruiter__username", "industry")
    readonly_fields = ("posted_at", "updated_at", "views", "applications_count")
