# teams/serializers.py - Team request and response shapes

from rest_framework import serializers
from .models import Team


class TeamSerializer(serializers.ModelSerializer):
    """Team document as returned by the read endpoint"""
    size = serializers.IntegerField(read_only=True)

    class Meta:
        model = Team
        fields = ['team_id', 'team_name', 'leader_email', 'members', 'status', 'size', 'created', 'updated']
        read_only_fields = fields


class TeamIdSerializer(serializers.Serializer):
    """Body of join / decline / leave / disband"""
    team_id = serializers.CharField(max_length=64)


class CreateTeamSerializer(serializers.Serializer):
    # Name charset and team size are checked by the lifecycle manager
    team_name = serializers.CharField(trim_whitespace=False, allow_blank=True)
    members = serializers.ListField(child=serializers.EmailField(), required=False, default=list)


class InviteMembersSerializer(TeamIdSerializer):
    emails = serializers.ListField(child=serializers.EmailField(), allow_empty=False)


class RemoveMembersSerializer(TeamIdSerializer):
    member_emails = serializers.ListField(child=serializers.EmailField(), allow_empty=False)


class ReadTeamSerializer(serializers.Serializer):
    team_id = serializers.CharField(max_length=64, required=False, allow_blank=True)
    member_email = serializers.EmailField(required=False, allow_blank=True)

    def validate(self, attrs):
        if not attrs.get('team_id') and not attrs.get('member_email'):
            raise serializers.ValidationError("Either team_id or member_email is required")
        return attrs
