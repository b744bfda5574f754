"""
Role and ownership rules.

ACCESS_POLICY maps (role, action) to an ownership predicate. A missing key
means the role may not perform the action at all (403). A predicate of None
means the role alone is enough; otherwise the predicate must hold for the
resource, and a failing predicate is reported as 404 so that other users'
records look the same as records that do not exist.
"""
from rest_framework.exceptions import NotFound, PermissionDenied
from rest_framework.permissions import BasePermission

from .models import User

STUDENT, RECRUITER, ADMIN = User.STUDENT, User.RECRUITER, User.ADMIN


def owns_as_student(user, resource):
    return resource.student_id == user.pk


def owns_posting(user, resource):
    """Recruiter owns the internship, or the internship an application belongs to."""
    internship = getattr(resource, 'internship', None)
    if internship is not None:
        return internship.recruiter_id == user.pk
    return resource.recruiter_id == user.pk


ACCESS_POLICY = {
    # internships (recruiter side)
    (RECRUITER, 'internship.list'): None,
    (RECRUITER, 'internship.create'): None,
    (RECRUITER, 'internship.retrieve'): owns_posting,
    (RECRUITER, 'internship.update'): owns_posting,
    (RECRUITER, 'internship.partial_update'): owns_posting,
    (RECRUITER, 'internship.destroy'): owns_posting,
    (RECRUITER, 'internship.applicants'): owns_posting,

    # applications
    (STUDENT, 'application.apply'): None,
    (STUDENT, 'application.my_applications'): None,
    (STUDENT, 'application.withdraw'): owns_as_student,
    (STUDENT, 'application.retrieve'): owns_as_student,
    (RECRUITER, 'application.retrieve'): owns_posting,
    (ADMIN, 'application.retrieve'): None,
    (STUDENT, 'application.add_note'): owns_as_student,
    (RECRUITER, 'application.add_note'): owns_posting,
    (ADMIN, 'application.add_note'): None,
    (RECRUITER, 'application.update'): owns_posting,
    (ADMIN, 'application.update'): None,
    (RECRUITER, 'application.update_status'): owns_posting,
    (RECRUITER, 'application.schedule_interview'): owns_posting,
    (STUDENT, 'application.stats'): None,
    (RECRUITER, 'application.stats'): None,
    (ADMIN, 'application.stats'): None,

    # skills
    (RECRUITER, 'skill.endorse'): None,
}


def is_permitted(user, action):
    return (user.role, action) in ACCESS_POLICY


def authorize(user, action, resource=None):
    """Raise PermissionDenied on a role mismatch and NotFound on an ownership mismatch."""
    key = (user.role, action)
    if key not in ACCESS_POLICY:
        raise PermissionDenied(f"Role '{user.role}' may not perform '{action}'.")
    predicate = ACCESS_POLICY[key]
    if resource is not None and predicate is not None and not predicate(user, resource):
        raise NotFound(f"{resource.__class__.__name__} not found.")
    return True


class RolePolicy(BasePermission):
    """
    Checks the role half of ACCESS_POLICY once per request. Views declare
    `policy_scope`; the action is `<policy_scope>.<view.action>`.
    """
    message = 'You do not have permission to perform this action.'

    def has_permission(self, request, view):
        user = request.user
        if not (user and user.is_authenticated):
            return False
        action = f"{view.policy_scope}.{view.action}"
        return is_permitted(user, action)


class HasRole(BasePermission):
    allowed_roles = ()

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.role in self.allowed_roles)


class IsStudent(HasRole):
    """Allow access only to students."""
    message = 'Student account required.'
    allowed_roles = (STUDENT,)


class IsRecruiter(HasRole):
    """Allow access only to recruiters."""
    message = 'Recruiter account required.'
    allowed_roles = (RECRUITER,)


class IsAdmin(HasRole):
    """Allow access only to admins."""
    message = 'Admin account required.'
    allowed_roles = (ADMIN,)
