from django.contrib import admin

from .models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('username', 'email', 'role', 'is_active', 'last_login', 'date_joined')
    search_fields = ('username', 'email')
    list_filter = ('role', 'is_active')
    readonly_fields = ('date_joined', 'last_login')
