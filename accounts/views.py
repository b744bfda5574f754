import logging

from django.contrib.auth import user_logged_in, user_logged_out
from django.contrib.auth.tokens import default_token_generator
from django.utils.encoding import force_bytes, force_str
from django.utils.http import urlsafe_base64_decode, urlsafe_base64_encode
from django.utils import timezone
from rest_framework import status
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.authtoken.models import Token
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import User
from .serializers import (
    RegisterSerializer, LoginSerializer, UpdatePasswordSerializer,
    ForgotPasswordSerializer, ResetPasswordSerializer,
    UserSerializer, MeSerializer,
)

logger = logging.getLogger(__name__)


def issue_token(user):
    """Replace any existing token with a fresh one."""
    Token.objects.filter(user=user).delete()
    return Token.objects.create(user=user)


def token_response(user, request, status_code=status.HTTP_200_OK):
    token = issue_token(user)
    return Response({
        'success': True,
        'token': token.key,
        'user': UserSerializer(user, context={'request': request}).data,
    }, status=status_code)


class RegisterView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info(f"Registered {user.role} {user.username}")
        return token_response(user, request, status.HTTP_201_CREATED)


class LoginView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data['user']

        user.last_login = timezone.now()
        user.save(update_fields=['last_login'])
        user_logged_in.send(sender=user.__class__, request=request, user=user)

        return token_response(user, request)


class LogoutView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        user = request.user
        Token.objects.filter(user=user).delete()
        user_logged_out.send(sender=user.__class__, request=request, user=user)
        return Response({'success': True, 'message': 'Logged out successfully'})


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        serializer = MeSerializer(request.user, context={'request': request})
        return Response({'success': True, 'user': serializer.data})


class UpdatePasswordView(APIView):
    permission_classes = [IsAuthenticated]

    def put(self, request):
        serializer = UpdatePasswordSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)

        user = request.user
        user.set_password(serializer.validated_data['new_password'])
        user.save(update_fields=['password'])

        return token_response(user, request)


class ForgotPasswordView(APIView):
    """
    Issue a single-use reset token. No mail is sent; the token is returned
    so the client can deliver it out of band.
    """
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = ForgotPasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = User.objects.filter(email=serializer.validated_data['email']).first()
        if user is None:
            raise NotFound("There is no user with that email")

        logger.info(f"Password reset requested for {user.username}")
        return Response({
            'success': True,
            'message': 'Password reset token generated',
            'uid': urlsafe_base64_encode(force_bytes(user.pk)),
            'reset_token': default_token_generator.make_token(user),
        })


class ResetPasswordView(APIView):
    permission_classes = [AllowAny]

    def put(self, request, uidb64, token):
        serializer = ResetPasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            user = User.objects.get(pk=force_str(urlsafe_base64_decode(uidb64)))
        except (TypeError, ValueError, OverflowError, User.DoesNotExist):
            user = None

        # tokens hash the current password, so a used token stops matching
        if user is None or not default_token_generator.check_token(user, token):
            raise ValidationError("Invalid or expired reset token")

        user.set_password(serializer.validated_data['password'])
        user.save(update_fields=['password'])
        logger.info(f"Password reset for {user.username}")

        return token_response(user, request)
