import logging
import os
from datetime import timedelta

from django.conf import settings
from django.core.files.storage import default_storage
from django.db import transaction
from django.db.models import F
from django.utils import timezone
from rest_framework import serializers

from .models import Skill, SkillAssessment, StudentProfile

logger = logging.getLogger(__name__)

ALLOWED_RESUME_EXTENSIONS = ('.pdf', '.doc', '.docx')
REASSESSMENT_INTERVAL = timedelta(days=30)


def proficiency_for_score(score):
    if score >= 90:
        return 'expert'
    if score >= 70:
        return 'advanced'
    if score >= 40:
        return 'intermediate'
    return 'beginner'


def grade_answers(questions, answers):
    """
    Mark each answer against the question key. Returns (graded_answers, correct_count).
    Answers arrive validated: indexes in range, at most one per question.
    """
    graded = []
    correct = 0
    for answer in answers:
        index = answer['question_index']
        is_correct = answer['selected_answer'] == questions[index]['correct_answer']
        correct += int(is_correct)
        graded.append({
            'question_index': index,
            'selected_answer': answer['selected_answer'],
            'is_correct': is_correct,
            'time_spent': answer.get('time_spent', 0),
        })
    return graded, correct


def build_recommendations(skill, level, questions, graded):
    recommendations = []
    for answer in graded:
        explanation = questions[answer['question_index']].get('explanation')
        if not answer['is_correct'] and explanation:
            recommendations.append(f"Review: {explanation}")

    if level == 'beginner':
        recommendations.append(f"Start with the fundamentals of {skill}.")
    elif level == 'intermediate':
        recommendations.append(f"Build a small project that uses {skill}.")
    elif level == 'advanced':
        recommendations.append(f"Practice harder {skill} problems to reach expert level.")
    else:
        recommendations.append(f"Consider mentoring others in {skill}.")
    return recommendations


def record_assessment(user, skill_name, questions, answers, started_at=None):
    """
    Store a completed attempt and copy its result onto the matching profile
    skill, creating the skill if the student does not list it yet.
    """
    completed_at = timezone.now()
    graded, correct = grade_answers(questions, answers)
    total = len(questions)
    score = round(correct * 100 / total)
    level = proficiency_for_score(score)

    spent = sum(answer['time_spent'] for answer in graded)
    if started_at is None:
        started_at = completed_at - timedelta(seconds=spent)
    time_taken = spent or max(int((completed_at - started_at).total_seconds()), 0)

    with transaction.atomic():
        profile = StudentProfile.objects.select_for_update().get(user=user)
        previous = SkillAssessment.objects.filter(student=user, skill__iexact=skill_name).count()

        skill = profile.skills.filter(name__iexact=skill_name).first()
        if skill is None:
            skill = Skill(profile=profile, name=skill_name)
        # attempts are stored under the profile's spelling of the skill
        skill_name = skill.name

        assessment = SkillAssessment.objects.create(
            student=user,
            skill=skill_name,
            questions=questions,
            answers=graded,
            score=score,
            total_questions=total,
            correct_answers=correct,
            time_taken=time_taken,
            started_at=started_at,
            completed_at=completed_at,
            proficiency_level=level,
            recommendations=build_recommendations(skill_name, level, questions, graded),
            next_assessment_date=completed_at + REASSESSMENT_INTERVAL,
            attempt_number=previous + 1,
        )

        skill.score = score
        skill.proficiency = level
        skill.last_assessed = completed_at
        skill.save()

        if previous == 0:
            StudentProfile.objects.filter(pk=profile.pk).update(
                skills_assessed_count=F('skills_assessed_count') + 1
            )

    logger.info(f"Recorded {skill_name} assessment #{assessment.attempt_number} for {user.username}: {score}%")
    return assessment


def store_resume(user, upload):
    """Save an uploaded resume and return (url, filename)."""
    ext = os.path.splitext(upload.name)[1].lower()
    if ext not in ALLOWED_RESUME_EXTENSIONS:
        raise serializers.ValidationError({'resume': "Only PDF, DOC, and DOCX files are allowed"})
    if upload.size > settings.RESUME_MAX_BYTES:
        raise serializers.ValidationError({'resume': "Resume exceeds the maximum upload size"})

    filename = f"resume_{user.pk}_{timezone.now().strftime('%Y%m%d%H%M%S')}{ext}"
    stored_name = default_storage.save(f"resumes/{filename}", upload)
    return default_storage.url(stored_name), os.path.basename(stored_name)
