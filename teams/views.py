# teams/views.py - Team Formation API Views

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from .lifecycle import TeamLifecycleManager
from .serializers import (
    CreateTeamSerializer,
    InviteMembersSerializer,
    ReadTeamSerializer,
    RemoveMembersSerializer,
    TeamIdSerializer,
    TeamSerializer,
)


def ok(message, **data):
    return Response(
        {'statusCode': status.HTTP_200_OK, 'message': message, **data},
        status=status.HTTP_200_OK,
    )


class TeamViewSet(viewsets.GenericViewSet):
    """
    API for forming and managing hackathon teams

    Every action acts as the authenticated user (auth_email in the body).
    """
    permission_classes = [IsAuthenticated]
    serializer_class = TeamSerializer

    def get_manager(self):
        return TeamLifecycleManager()

    def _validated(self, serializer_class):
        serializer = serializer_class(data=self.request.data)
        serializer.is_valid(raise_exception=True)
        return serializer.validated_data

    @action(detail=False, methods=['post'], url_path='create')
    def create_team(self, request):
        """
        POST /api/teams/create/
        Body: {"team_name": "...", "members": ["a@x.edu", ...]}
        """
        data = self._validated(CreateTeamSerializer)
        team = self.get_manager().create_team(request.user.email, data['team_name'], data['members'])
        return ok('Team created successfully', team_id=team.team_id)

    @action(detail=False, methods=['post'], url_path='invite')
    def invite(self, request):
        """
        POST /api/teams/invite/
        Body: {"team_id": "...", "emails": [...]}
        """
        data = self._validated(InviteMembersSerializer)
        result = self.get_manager().invite_members(data['team_id'], request.user.email, data['emails'])
        return ok('Invitations sent successfully', **result)

    @action(detail=False, methods=['post'], url_path='join')
    def join(self, request):
        """POST /api/teams/join/"""
        data = self._validated(TeamIdSerializer)
        team = self.get_manager().accept_invite(request.user.email, data['team_id'])
        return ok('Successfully joined team', team_id=team.team_id)

    @action(detail=False, methods=['post'], url_path='decline-invite')
    def decline_invite(self, request):
        """POST /api/teams/decline-invite/"""
        data = self._validated(TeamIdSerializer)
        self.get_manager().decline_invite(request.user.email, data['team_id'])
        return ok('Team invitation declined successfully')

    @action(detail=False, methods=['post'], url_path='leave')
    def leave(self, request):
        """
        POST /api/teams/leave/

        A leader leaving disbands the team.
        """
        data = self._validated(TeamIdSerializer)
        team = self.get_manager().leave_team(request.user.email, data['team_id'])
        if team.leader_email == request.user.email:
            return ok('Team disbanded successfully')
        return ok('Successfully left team')

    @action(detail=False, methods=['post'], url_path='disband')
    def disband(self, request):
        """POST /api/teams/disband/ (leader, organizer or director)"""
        data = self._validated(TeamIdSerializer)
        self.get_manager().disband_team(data['team_id'], actor=request.user)
        return ok('Team disbanded successfully')

    @action(detail=False, methods=['post'], url_path='member-removal')
    def member_removal(self, request):
        """
        POST /api/teams/member-removal/
        Body: {"team_id": "...", "member_emails": [...]}
        """
        data = self._validated(RemoveMembersSerializer)
        result = self.get_manager().remove_members(request.user.email, data['team_id'], data['member_emails'])
        return ok('Team members removed successfully', **result)

    @action(detail=False, methods=['post'], url_path='read')
    def read(self, request):
        """
        POST /api/teams/read/
        Body: {"team_id": "..."} or {"member_email": "..."}
        """
        data = self._validated(ReadTeamSerializer)
        team = self.get_manager().read_team(
            request.user,
            team_id=data.get('team_id') or None,
            member_email=data.get('member_email') or None,
        )
        return ok('Successfully read team', team=TeamSerializer(team).data)
