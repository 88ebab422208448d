# users/views.py - Registration API

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from core.exceptions import NotFoundError
from .oracle import ExistenceOracle
from .serializers import UpdateRequestSerializer, UserExistsSerializer, UserSerializer
from .state_machine import RegistrationStatusMachine


class RegistrationViewSet(viewsets.GenericViewSet):
    """
    Registration updates and account look-ups.

    Credentials (auth_email + auth_token) travel in the body.
    """
    permission_classes = [IsAuthenticated]
    serializer_class = UserSerializer

    @action(detail=False, methods=['post'], url_path='update')
    def update_registration(self, request):
        """
        POST /api/users/update/
        Body: {user_email, updates: {"$set": {...}}}
        """
        payload = UpdateRequestSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        machine = RegistrationStatusMachine()
        user = machine.update_registration(
            request.user,
            payload.validated_data['user_email'],
            payload.validated_data['updates'],
        )

        return Response({
            'statusCode': status.HTTP_200_OK,
            'message': 'User updated successfully',
            'user': UserSerializer(user).data,
        })

    @action(detail=False, methods=['post'], url_path='exists')
    def exists(self, request):
        """
        POST /api/users/exists/
        Body: {email}
        """
        payload = UserExistsSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        if not ExistenceOracle().exists(payload.validated_data['email']):
            raise NotFoundError('Look-up user was not found')

        return Response({
            'statusCode': status.HTTP_200_OK,
            'message': 'User exists',
        })
