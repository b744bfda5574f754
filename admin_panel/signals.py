from django.contrib.auth.signals import user_logged_in, user_logged_out
from django.dispatch import receiver
from .utils import log_admin_activity, get_client_ip
import logging

logger = logging.getLogger(__name__)


@receiver(user_logged_in)
def log_user_login(sender, request, user, **kwargs):
    """Log admin login"""
    if user.is_admin:
        log_admin_activity(
            admin=user,
            action='LOGIN',
            model_name='User',
            object_id=user.id,
            description=f"Admin {user.username} logged in",
            ip_address=get_client_ip(request) if request is not None else None
        )


@receiver(user_logged_out)
def log_user_logout(sender, request, user, **kwargs):
    """Log admin logout"""
    if user and user.is_admin:
        log_admin_activity(
            admin=user,
            action='LOGOUT',
            model_name='User',
            object_id=user.id,
            description=f"Admin {user.username} logged out",
            ip_address=get_client_ip(request) if request is not None else None
        )
