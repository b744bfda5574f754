from django.conf import settings
from django.core.validators import RegexValidator
from django.db import IntegrityError, transaction
from django.db.models import Q
from rest_framework import serializers
from rest_framework.exceptions import AuthenticationFailed

from intern_track.exceptions import ConflictError
from .models import User
from .utils import USERNAME_RE, check_password_strength, create_role_profile


# -------------------------------
# USER SERIALIZERS
# -------------------------------
class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'role', 'is_active', 'last_login', 'date_joined']
        read_only_fields = fields


class MeSerializer(UserSerializer):
    """Current user with the role profile embedded"""
    profile = serializers.SerializerMethodField()

    class Meta(UserSerializer.Meta):
        fields = UserSerializer.Meta.fields + ['profile']
        read_only_fields = fields

    def get_profile(self, obj):
        profile = obj.profile
        if profile is None:
            return None
        if obj.is_student:
            from students.serializers import StudentProfileSerializer
            return StudentProfileSerializer(profile, context=self.context).data
        from recruiters.serializers import RecruiterProfileSerializer
        return RecruiterProfileSerializer(profile, context=self.context).data


# -------------------------------
# REGISTRATION
# -------------------------------
class RegisterSerializer(serializers.Serializer):
    username = serializers.CharField(
        min_length=3,
        max_length=30,
        validators=[RegexValidator(
            USERNAME_RE,
            "Username can only contain letters, numbers, and underscores",
        )],
    )
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)
    role = serializers.ChoiceField(choices=User.ROLE_CHOICES, default=User.STUDENT)
    first_name = serializers.CharField(max_length=50, required=False, allow_blank=True, default='')
    last_name = serializers.CharField(max_length=50, required=False, allow_blank=True, default='')

    def validate_email(self, value):
        return value.strip().lower()

    def validate_password(self, value):
        return check_password_strength(value)

    def validate_role(self, value):
        if value == User.ADMIN and not settings.ALLOW_ADMIN_SIGNUP:
            raise serializers.ValidationError("Admin accounts cannot be self-registered.")
        return value

    def validate(self, attrs):
        if User.objects.filter(Q(email=attrs['email']) | Q(username=attrs['username'])).exists():
            raise ConflictError("User with this email or username already exists")
        return attrs

    def create(self, validated_data):
        first_name = validated_data.pop('first_name', '')
        last_name = validated_data.pop('last_name', '')
        try:
            with transaction.atomic():
                user = User.objects.create_user(
                    email=validated_data['email'],
                    username=validated_data['username'],
                    password=validated_data['password'],
                    role=validated_data['role'],
                )
                create_role_profile(user, first_name=first_name, last_name=last_name)
        except IntegrityError:
            # lost a race with a concurrent registration
            raise ConflictError("User with this email or username already exists")
        return user


# -------------------------------
# LOGIN / PASSWORD
# -------------------------------
class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs):
        email = attrs['email'].strip().lower()
        user = User.objects.filter(email=email).first()

        if user is None or not user.check_password(attrs['password']):
            raise AuthenticationFailed("Invalid email or password")

        if not user.is_active:
            raise AuthenticationFailed("Your account has been deactivated")

        attrs['user'] = user
        return attrs


class UpdatePasswordSerializer(serializers.Serializer):
    current_password = serializers.CharField(write_only=True)
    new_password = serializers.CharField(write_only=True)

    def validate_current_password(self, value):
        user = self.context['request'].user
        if not user.check_password(value):
            raise serializers.ValidationError("Current password is incorrect")
        return value

    def validate_new_password(self, value):
        return check_password_strength(value)


class ForgotPasswordSerializer(serializers.Serializer):
    email = serializers.EmailField()

    def validate_email(self, value):
        return value.strip().lower()


class ResetPasswordSerializer(serializers.Serializer):
    password = serializers.CharField(write_only=True)

    def validate_password(self, value):
        return check_password_strength(value)
