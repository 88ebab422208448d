from django.contrib import admin
from .models import Team, TeamInvite


class TeamInviteInline(admin.TabularInline):
    model = TeamInvite
    extra = 0
    fields = ('user', 'invited_by', 'invited_at')
    readonly_fields = ('invited_at',)


@admin.register(Team)
class TeamAdmin(admin.ModelAdmin):
    list_display = ('team_name', 'team_id', 'leader_email', 'status', 'created')
    list_filter = ('status',)
    search_fields = ('team_name', 'team_id', 'leader_email')
    readonly_fields = ('team_id', 'created', 'updated')
    inlines = [TeamInviteInline]


@admin.register(TeamInvite)
class TeamInviteAdmin(admin.ModelAdmin):
    list_display = ('user', 'team', 'invited_by', 'invited_at')
    search_fields = ('user__email', 'team__team_id', 'team_name')
