from django.urls import path

from .views import (
    RegisterView, LoginView, LogoutView, MeView, UpdatePasswordView,
    ForgotPasswordView, ResetPasswordView,
)

urlpatterns = [
    path('register', RegisterView.as_view(), name='register'),
    path('login', LoginView.as_view(), name='login'),
    path('logout', LogoutView.as_view(), name='logout'),
    path('me', MeView.as_view(), name='me'),
    path('updatepassword', UpdatePasswordView.as_view(), name='update-password'),
    path('forgotpassword', ForgotPasswordView.as_view(), name='forgot-password'),
    path('resetpassword/<str:uidb64>/<str:token>', ResetPasswordView.as_view(), name='reset-password'),
]
