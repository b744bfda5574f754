from django.contrib import admin
from .models import Application, ApplicationNote


class ApplicationNoteInline(admin.TabularInline):
    model = ApplicationNote
    extra = 0
    readonly_fields = ('author', 'content', 'created_at')


@admin.register(Application)
class ApplicationAdmin(admin.ModelAdmin):
    list_display = ('student', 'internship', 'recruiter', 'status', 'applied_at', 'last_updated')
    list_filter = ('status', 'applied_at')
    search_fields = ('student__username', 'student__email', 'internship__title', 'internship__company')
    readonly_fields = ('applied_at', 'last_updated')
    inlines = [ApplicationNoteInline]
