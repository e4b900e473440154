from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from django.core import exceptions as django_exc

from .models import CustomUser


class RegistrationSerializer(serializers.ModelSerializer):
    """Registration payload -> creates a user and hashes password."""
    password = serializers.CharField(write_only=True, required=True, style={'input_type': 'password'})
    username = serializers.CharField(required=False, allow_blank=True, max_length=40)

    class Meta:
        model = CustomUser
        fields = ('email', 'password', 'username')

    def validate_password(self, value):
        """Run Django's password validators (AUTH_PASSWORD_VALIDATORS)."""
        try:
            validate_password(value)
        except django_exc.ValidationError as e:
            raise serializers.ValidationError(list(e.messages))
        return value

    def create(self, validated_data):
        extra = {}
        if validated_data.get('username'):
            extra['username'] = validated_data['username']
        return CustomUser.objects.create_user(
            email=validated_data['email'],
            password=validated_data['password'],
            **extra,
        )


class CustomUserSerializer(serializers.ModelSerializer):
    """Own-profile representation; moderation flags are read-only."""

    class Meta:
        model = CustomUser
        fields = ('id', 'email', 'username', 'avatar_url', 'is_staff', 'is_suspended')
        read_only_fields = ('id', 'email', 'is_staff', 'is_suspended')


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField(required=True)
    password = serializers.CharField(required=True, write_only=True, style={'input_type': 'password'})
