from rest_framework import serializers

from intern_track.exceptions import ConflictError
from .models import (
    PROFICIENCY_CHOICES, StudentProfile, Skill, Education, Experience,
    PortfolioItem, SkillAssessment,
)


# -------------------------------
# SKILLS
# -------------------------------
class SkillSerializer(serializers.ModelSerializer):
    endorsements_count = serializers.SerializerMethodField()
    endorsed_by = serializers.PrimaryKeyRelatedField(source='endorsements', many=True, read_only=True)

    class Meta:
        model = Skill
        fields = ['id', 'name', 'proficiency', 'score', 'last_assessed', 'endorsements_count', 'endorsed_by']
        read_only_fields = ['id', 'score', 'last_assessed']

    def get_endorsements_count(self, obj):
        return obj.endorsements.count()

    def validate_name(self, value):
        value = value.strip()
        profile = self.context['profile']
        qs = profile.skills.filter(name__iexact=value)
        if self.instance:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise ConflictError("Skill already exists in profile")
        return value


class SkillUpdateSerializer(serializers.ModelSerializer):
    """Proficiency and/or score. Name changes go through add/remove."""
    proficiency = serializers.ChoiceField(choices=PROFICIENCY_CHOICES, required=False)
    score = serializers.IntegerField(min_value=0, max_value=100, required=False)

    class Meta:
        model = Skill
        fields = ['proficiency', 'score']


# -------------------------------
# EDUCATION / EXPERIENCE / PORTFOLIO
# -------------------------------
class EducationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Education
        exclude = ['profile']


class ExperienceSerializer(serializers.ModelSerializer):
    class Meta:
        model = Experience
        exclude = ['profile']

    def validate(self, attrs):
        start = attrs.get('start_date', getattr(self.instance, 'start_date', None))
        end = attrs.get('end_date', getattr(self.instance, 'end_date', None))
        if start and end and end < start:
            raise serializers.ValidationError({'end_date': "End date cannot be before start date"})
        return attrs


class PortfolioItemSerializer(serializers.ModelSerializer):
    technologies = serializers.ListField(child=serializers.CharField(max_length=50), required=False)

    class Meta:
        model = PortfolioItem
        exclude = ['profile']


# -------------------------------
# PROFILE
# -------------------------------
class StudentProfileSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source='user.username', read_only=True)
    email = serializers.EmailField(source='user.email', read_only=True)
    full_name = serializers.CharField(read_only=True)
    skills = SkillSerializer(many=True, read_only=True)
    education = EducationSerializer(many=True, read_only=True)
    experience = ExperienceSerializer(many=True, read_only=True)
    portfolio = PortfolioItemSerializer(many=True, read_only=True)
    stats = serializers.DictField(read_only=True)
    preferred_job_types = serializers.ListField(
        child=serializers.ChoiceField(choices=['internship', 'full-time', 'part-time', 'remote']),
        required=False,
    )
    preferred_locations = serializers.ListField(child=serializers.CharField(max_length=100), required=False)
    preferred_industries = serializers.ListField(child=serializers.CharField(max_length=100), required=False)

    class Meta:
        model = StudentProfile
        fields = [
            'id', 'user', 'username', 'email',
            'first_name', 'last_name', 'full_name', 'phone', 'location', 'bio', 'avatar',
            'resume_url', 'resume_filename', 'resume_uploaded_at',
            'linkedin', 'github', 'website',
            'preferred_job_types', 'preferred_locations', 'preferred_industries',
            'skills', 'education', 'experience', 'portfolio',
            'stats', 'created_at', 'updated_at',
        ]
        read_only_fields = [
            'id', 'user', 'resume_url', 'resume_filename', 'resume_uploaded_at',
            'created_at', 'updated_at',
        ]


class StudentSummarySerializer(serializers.ModelSerializer):
    """Compact profile used inside applicant listings"""
    username = serializers.CharField(source='user.username', read_only=True)
    email = serializers.EmailField(source='user.email', read_only=True)
    skills = SkillSerializer(many=True, read_only=True)

    class Meta:
        model = StudentProfile
        fields = ['id', 'user', 'username', 'email', 'first_name', 'last_name', 'location', 'resume_url', 'skills']


# -------------------------------
# ASSESSMENTS
# -------------------------------
class SkillAssessmentSerializer(serializers.ModelSerializer):
    accuracy_percentage = serializers.IntegerField(read_only=True)
    duration_in_minutes = serializers.IntegerField(read_only=True)

    class Meta:
        model = SkillAssessment
        fields = [
            'id', 'skill', 'questions', 'answers', 'score', 'total_questions', 'correct_answers',
            'time_taken', 'started_at', 'completed_at', 'proficiency_level', 'recommendations',
            'next_assessment_date', 'attempt_number', 'accuracy_percentage', 'duration_in_minutes',
        ]
        read_only_fields = fields


class QuestionSerializer(serializers.Serializer):
    question = serializers.CharField()
    options = serializers.ListField(child=serializers.CharField(), min_length=2)
    correct_answer = serializers.IntegerField(min_value=0)
    explanation = serializers.CharField(required=False, allow_blank=True)
    difficulty = serializers.ChoiceField(choices=['easy', 'medium', 'hard'], default='medium')

    def validate(self, attrs):
        if attrs['correct_answer'] >= len(attrs['options']):
            raise serializers.ValidationError({'correct_answer': "Correct answer must index one of the options"})
        return attrs


class AnswerSerializer(serializers.Serializer):
    question_index = serializers.IntegerField(min_value=0)
    selected_answer = serializers.IntegerField(min_value=0)
    time_spent = serializers.IntegerField(min_value=0, default=0)


class AssessmentSubmissionSerializer(serializers.Serializer):
    skill = serializers.CharField(max_length=100)
    questions = QuestionSerializer(many=True, allow_empty=False)
    answers = AnswerSerializer(many=True)
    started_at = serializers.DateTimeField(required=False)

    def validate_skill(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Skill name is required")
        return value

    def validate(self, attrs):
        total = len(attrs['questions'])
        seen = set()
        for answer in attrs['answers']:
            index = answer['question_index']
            if index >= total:
                raise serializers.ValidationError({'answers': f"Question index {index} is out of range"})
            if index in seen:
                raise serializers.ValidationError({'answers': f"Question {index} is answered more than once"})
            seen.add(index)
        return attrs
