from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .models import User

@admin.register(User)
class CustomUserAdmin(UserAdmin):
    ordering = ('email',)
    list_display = ('email', 'first_name', 'last_name', 'registration_status', 'confirmed_team', 'team_role', 'is_staff')
    list_filter = ('registration_status', 'confirmed_team', 'is_staff', 'is_superuser', 'is_active')
    search_fields = ('email', 'first_name', 'last_name', 'school')
    readonly_fields = ('created_at', 'registered_at', 'last_login', 'date_joined')
    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Personal info', {'fields': ('first_name', 'last_name', 'phone_number', 'date_of_birth', 'gender', 'ethnicity')}),
        ('School', {'fields': ('level_of_study', 'school', 'major', 'grad_year')}),
        ('Hackathon', {'fields': ('role', 'registration_status', 'registered_at', 'shirt_size',
                                  'dietary_restrictions', 'special_needs', 'github', 'short_answer')}),
        ('Team', {'fields': ('confirmed_team', 'team_id', 'team_role')}),
        ('Permissions', {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Important dates', {'fields': ('last_login', 'date_joined', 'created_at')}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'password1', 'password2', 'role'),
        }),
    )
