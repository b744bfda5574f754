import logging

from django.db.models import Avg, Count, Sum
from django.db.models.functions import Coalesce

from .models import AdminActivity

logger = logging.getLogger(__name__)


def log_admin_activity(admin, action, model_name, object_id=None, description="", ip_address=None):
    """Helper function to log admin activities"""
    try:
        AdminActivity.objects.create(
            admin=admin,
            action=action,
            model_name=model_name,
            object_id=object_id,
            description=description,
            ip_address=ip_address
        )
    except Exception as e:
        logger.error(f"Failed to log admin activity: {str(e)}")


def get_client_ip(request):
    """Get client IP address"""
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        ip = x_forwarded_for.split(',')[0].strip()
    else:
        ip = request.META.get('REMOTE_ADDR')
    return ip


def generate_analytics():
    """Platform-wide overview used by the admin dashboard"""
    from accounts.models import User
    from applications.models import Application
    from applications.stats import monthly_counts, status_breakdown
    from internships.models import Internship
    from students.models import Skill, StudentProfile

    applications = Application.objects.all()

    skills = (
        Skill.objects.values('name')
        .annotate(count=Count('id'), average_score=Avg('score'))
        .order_by('-count', 'name')[:10]
    )

    recent_students = (
        User.objects.filter(role=User.STUDENT)
        .order_by('-date_joined', '-id')
        .values('id', 'username', 'email', 'date_joined')[:5]
    )

    top_students = (
        StudentProfile.objects
        .annotate(total_score=Coalesce(Sum('skills__score'), 0), skills_count=Count('skills'))
        .order_by('-total_score', 'id')
        .values('user_id', 'user__username', 'user__email', 'total_score', 'skills_count')[:5]
    )

    return {
        'overview': {
            'total_students': User.objects.filter(role=User.STUDENT).count(),
            'total_recruiters': User.objects.filter(role=User.RECRUITER).count(),
            'total_internships': Internship.objects.count(),
            'total_applications': applications.count(),
            'active_internships': Internship.objects.listed().count(),
            'pending_internships': Internship.objects.filter(is_approved=False).count(),
        },
        'application_stats': status_breakdown(applications),
        'skills_distribution': [
            {'name': row['name'], 'count': row['count'], 'average_score': round(row['average_score'] or 0, 2)}
            for row in skills
        ],
        'recent_students': list(recent_students),
        'top_students': [
            {
                'id': row['user_id'],
                'username': row['user__username'],
                'email': row['user__email'],
                'total_score': row['total_score'],
                'skills_count': row['skills_count'],
            }
            for row in top_students
        ],
        'monthly_applications': monthly_counts(applications),
    }
