"""
Application lifecycle.

    applied     -> shortlisted | interview | rejected | withdrawn
    shortlisted -> interview | selected | rejected | withdrawn
    interview   -> interview (reschedule only) | selected | rejected | withdrawn
    selected, rejected, withdrawn are terminal

Only the student may withdraw; every other move belongs to the recruiter that
owns the internship. Each write here runs in one transaction together with
the stats counters it touches.
"""
import logging

from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from intern_track.exceptions import ConflictError, InvalidTransitionError
from internships.models import Internship
from recruiters.models import RecruiterProfile
from students.models import StudentProfile
from .models import Application, ApplicationNote

logger = logging.getLogger(__name__)

A = Application

TRANSITIONS = {
    A.APPLIED: {A.SHORTLISTED, A.INTERVIEW, A.REJECTED, A.WITHDRAWN},
    A.SHORTLISTED: {A.INTERVIEW, A.SELECTED, A.REJECTED, A.WITHDRAWN},
    A.INTERVIEW: {A.INTERVIEW, A.SELECTED, A.REJECTED, A.WITHDRAWN},
    A.SELECTED: set(),
    A.REJECTED: set(),
    A.WITHDRAWN: set(),
}

TERMINAL_STATES = {state for state, targets in TRANSITIONS.items() if not targets}
SCHEDULABLE_STATES = {A.APPLIED, A.SHORTLISTED, A.INTERVIEW}


def can_transition(current, target, reschedule=False):
    if current == target == A.INTERVIEW:
        return reschedule
    return target in TRANSITIONS.get(current, set())


def check_transition(current, target, reschedule=False):
    if current in TERMINAL_STATES:
        raise InvalidTransitionError(f"Application is already {current}")
    if not can_transition(current, target, reschedule=reschedule):
        raise InvalidTransitionError(f"Cannot move application from {current} to {target}")


def _locked(application):
    """Re-read the row under a lock so the status check sees committed state."""
    return Application.objects.select_for_update().select_related('internship').get(pk=application.pk)


def _bump(model, lookup, **counters):
    model.objects.filter(**lookup).update(
        **{field: F(field) + amount for field, amount in counters.items()}
    )


# -------------------------------
# APPLY
# -------------------------------
def apply(student, internship_id, cover_letter='', resume=None):
    internship = Internship.objects.filter(pk=internship_id).first()
    if internship is None:
        raise NotFound("Internship not found")

    if not internship.is_active or not internship.is_approved:
        raise ValidationError("Internship is not available for applications")

    if internship.is_expired:
        raise ValidationError("Application deadline has passed")

    if Application.objects.filter(student=student, internship=internship).exists():
        raise ConflictError("You have already applied for this internship")

    if resume is None:
        profile = StudentProfile.objects.filter(user=student).first()
        resume = {
            'url': profile.resume_url if profile else '',
            'filename': profile.resume_filename if profile else '',
        }

    with transaction.atomic():
        try:
            with transaction.atomic():
                application = Application.objects.create(
                    student=student,
                    internship=internship,
                    recruiter_id=internship.recruiter_id,
                    cover_letter=cover_letter or '',
                    resume_url=resume.get('url') or '',
                    resume_filename=resume.get('filename') or '',
                )
        except IntegrityError:
            raise ConflictError("You have already applied for this internship")

        _bump(Internship, {'pk': internship.pk}, applications_count=1)
        _bump(StudentProfile, {'user': student}, applications_count=1)
        _bump(RecruiterProfile, {'user_id': internship.recruiter_id}, applications_received=1)

    logger.info(f"{student.username} applied to internship {internship.pk} (application {application.pk})")
    return application


# -------------------------------
# STUDENT MOVES
# -------------------------------
def withdraw(application):
    with transaction.atomic():
        application = _locked(application)

        if application.status == A.SELECTED:
            raise InvalidTransitionError("Cannot withdraw a selected application")
        check_transition(application.status, A.WITHDRAWN)

        previous = application.status
        application.status = A.WITHDRAWN
        application.last_updated = timezone.now()
        application.save(update_fields=['status', 'last_updated'])

        Internship.objects.filter(pk=application.internship_id, applications_count__gt=0).update(
            applications_count=F('applications_count') - 1
        )

    logger.info(f"Application {application.pk} moved {previous} -> {A.WITHDRAWN}")
    return application


# -------------------------------
# RECRUITER MOVES
# -------------------------------
def change_status(application, status, actor, note=''):
    if status == A.WITHDRAWN:
        raise InvalidTransitionError("Only the student can withdraw an application")

    with transaction.atomic():
        application = _locked(application)
        check_transition(application.status, status)

        previous = application.status
        application.status = status
        application.last_updated = timezone.now()
        application.save(update_fields=['status', 'last_updated'])

        if note:
            ApplicationNote.objects.create(application=application, author=actor, content=note)

        if status == A.SELECTED:
            _bump(StudentProfile, {'user_id': application.student_id}, selected_count=1)
            _bump(RecruiterProfile, {'user_id': application.internship.recruiter_id}, candidates_hired=1)
        elif status == A.SHORTLISTED:
            _bump(StudentProfile, {'user_id': application.student_id}, shortlisted_count=1)

    logger.info(f"Application {application.pk} moved {previous} -> {status}")
    return application


def schedule_interview(application, date, time='', location='', interview_type='', notes=''):
    with transaction.atomic():
        application = _locked(application)
        if application.status not in SCHEDULABLE_STATES:
            raise InvalidTransitionError(
                f"Cannot schedule an interview for a {application.status} application"
            )
        check_transition(application.status, A.INTERVIEW, reschedule=True)

        previous = application.status
        application.interview_date = date
        application.interview_time = time or ''
        application.interview_location = location or ''
        application.interview_type = interview_type or ''
        application.interview_notes = notes or ''
        application.status = A.INTERVIEW
        application.last_updated = timezone.now()
        application.save()

    logger.info(f"Application {application.pk} moved {previous} -> {A.INTERVIEW} (interview on {date})")
    return application


# -------------------------------
# NOTES / FEEDBACK
# -------------------------------
def add_note(application, author, content):
    return ApplicationNote.objects.create(application=application, author=author, content=content)


def set_feedback(application, actor, rating=None, comments=''):
    application.feedback_rating = rating
    application.feedback_comments = comments or ''
    application.feedback_given_by = actor
    application.feedback_given_at = timezone.now()
    application.save(update_fields=[
        'feedback_rating', 'feedback_comments', 'feedback_given_by', 'feedback_given_at',
    ])
    return application
