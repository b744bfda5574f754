from django.contrib import admin
from .models import RecruiterProfile

@admin.register(RecruiterProfile)
class RecruiterProfileAdmin(admin.ModelAdmin):
    list_display = ('user', 'company', 'industry', 'is_verified', 'internships_posted', 'applications_received', 'candidates_hired')
    search_fields = ('user__username', 'user__email', 'company')
    list_filter = ('is_verified', 'company_size', 'industry')
    readonly_fields = ('created_at', 'updated_at')
