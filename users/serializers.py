from rest_framework import serializers

from core.validators import normalize_email
from .models import User
from .roles import Capability


class UserSerializer(serializers.ModelSerializer):
    team_info = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'email',
            'role',
            'registration_status',
            'confirmed_team',
            'team_info',
            'first_name',
            'last_name',
            # Profile Fields
            'phone_number',
            'date_of_birth',
            'gender',
            'ethnicity',
            'level_of_study',
            'school',
            'major',
            'grad_year',
            'shirt_size',
            'dietary_restrictions',
            'special_needs',
            'github',
            'short_answer',
            # System
            'email_verified',
            'created_at',
            'registered_at',
        ]
        read_only_fields = fields

    def get_team_info(self, obj):
        return obj.team_info


class RegistrationUpdateSerializer(serializers.ModelSerializer):
    """
    Writes the already-vetted ``$set`` values of a registration update.

    Which fields may appear, and which status moves are legal, is decided by
    RegistrationStatusMachine before this serializer runs.
    """
    role = serializers.ListField(child=serializers.ChoiceField(choices=Capability.choices), required=False)

    class Meta:
        model = User
        fields = [
            'email',
            'role',
            'registration_status',
            'first_name',
            'last_name',
            'phone_number',
            'date_of_birth',
            'gender',
            'ethnicity',
            'level_of_study',
            'school',
            'major',
            'grad_year',
            'shirt_size',
            'dietary_restrictions',
            'special_needs',
            'github',
            'short_answer',
        ]
        extra_kwargs = {
            # Uniqueness is checked (409) before the serializer runs
            'email': {'validators': []},
        }

    def validate_email(self, value):
        return normalize_email(value)

    def validate_role(self, value):
        # Keep storage order stable and drop repeats
        return [c.value for c in Capability if c.value in value]

    def update(self, instance, validated_data):
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save()
        return instance


class UserExistsSerializer(serializers.Serializer):
    email = serializers.EmailField()


class UpdateRequestSerializer(serializers.Serializer):
    user_email = serializers.EmailField()
    updates = serializers.DictField()
