from rest_framework import serializers

from students.serializers import StudentSummarySerializer
from .models import Application, ApplicationNote


class ApplicationNoteSerializer(serializers.ModelSerializer):
    author_name = serializers.CharField(source='author.username', read_only=True, default=None)

    class Meta:
        model = ApplicationNote
        fields = ['id', 'author', 'author_name', 'content', 'created_at']
        read_only_fields = ['id', 'author', 'author_name', 'created_at']


class ApplicationSerializer(serializers.ModelSerializer):
    internship_title = serializers.CharField(source='internship.title', read_only=True)
    company = serializers.CharField(source='internship.company', read_only=True)
    student_name = serializers.CharField(source='student.username', read_only=True)
    resume = serializers.SerializerMethodField()
    interview_schedule = serializers.DictField(read_only=True, allow_null=True)
    feedback = serializers.DictField(read_only=True, allow_null=True)
    notes = ApplicationNoteSerializer(many=True, read_only=True)
    days_since_applied = serializers.IntegerField(read_only=True)

    class Meta:
        model = Application
        fields = [
            'id', 'student', 'student_name', 'internship', 'internship_title', 'company',
            'recruiter', 'status', 'cover_letter', 'resume', 'applied_at', 'last_updated',
            'interview_schedule', 'feedback', 'notes', 'days_since_applied',
        ]
        read_only_fields = fields

    def get_resume(self, obj):
        if not obj.resume_url:
            return None
        return {'url': obj.resume_url, 'filename': obj.resume_filename}


class ApplicantSerializer(ApplicationSerializer):
    """Application as the recruiter sees it, with the student's profile attached"""
    student_profile = StudentSummarySerializer(source='student.student_profile', read_only=True, default=None)

    class Meta(ApplicationSerializer.Meta):
        fields = ApplicationSerializer.Meta.fields + ['student_profile']
        read_only_fields = fields


class ResumeSnapshotSerializer(serializers.Serializer):
    url = serializers.CharField(max_length=500)
    filename = serializers.CharField(max_length=255, required=False, allow_blank=True)


class ApplySerializer(serializers.Serializer):
    cover_letter = serializers.CharField(max_length=1000, required=False, allow_blank=True, default='')
    resume = ResumeSnapshotSerializer(required=False, allow_null=True)


class StatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Application.STATUS_CHOICES)
    notes = serializers.CharField(max_length=1000, required=False, allow_blank=True, default='')


class InterviewScheduleSerializer(serializers.Serializer):
    date = serializers.DateField()
    time = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    location = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    type = serializers.ChoiceField(choices=Application.INTERVIEW_TYPE_CHOICES, required=False, allow_blank=True, default='')
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class FeedbackSerializer(serializers.Serializer):
    rating = serializers.IntegerField(min_value=1, max_value=5)
    comments = serializers.CharField(required=False, allow_blank=True, default='')


class ApplicationUpdateSerializer(serializers.Serializer):
    notes = serializers.CharField(max_length=1000, required=False, allow_blank=True)
    feedback = FeedbackSerializer(required=False)

    def validate(self, attrs):
        if not attrs.get('notes') and 'feedback' not in attrs:
            raise serializers.ValidationError("Provide notes or feedback")
        return attrs


class NoteCreateSerializer(serializers.Serializer):
    content = serializers.CharField(max_length=1000)
