from django.contrib import admin
from .models import StudentProfile, Skill, Education, Experience, PortfolioItem, SkillAssessment


class SkillInline(admin.TabularInline):
    model = Skill
    extra = 0
    filter_horizontal = ('endorsements',)


# -------------------------------
# StudentProfile Admin
# -------------------------------
@admin.register(StudentProfile)
class StudentProfileAdmin(admin.ModelAdmin):
    list_display = (
        'user',
        'first_name',
        'last_name',
        'location',
        'applications_count',
        'shortlisted_count',
        'selected_count',
        'skills_assessed_count',
    )
    search_fields = ('user__username', 'user__email', 'first_name', 'last_name')
    list_filter = ('location',)
    readonly_fields = ('created_at', 'updated_at', 'resume_uploaded_at')
    inlines = [SkillInline]


@admin.register(Education)
class EducationAdmin(admin.ModelAdmin):
    list_display = ('profile', 'institution', 'degree', 'start_date', 'current')
    search_fields = ('institution', 'degree', 'profile__user__username')


@admin.register(Experience)
class ExperienceAdmin(admin.ModelAdmin):
    list_display = ('profile', 'company', 'position', 'start_date', 'current')
    search_fields = ('company', 'position', 'profile__user__username')


admin.site.register(PortfolioItem)


# -------------------------------
# SkillAssessment Admin
# -------------------------------
@admin.register(SkillAssessment)
class SkillAssessmentAdmin(admin.ModelAdmin):
    list_display = ('student', 'skill', 'score', 'proficiency_level', 'attempt_number', 'completed_at')
    search_fields = ('student__username', 'skill')
    list_filter = ('proficiency_level',)
    readonly_fields = ('completed_at',)
