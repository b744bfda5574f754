from rest_framework import serializers
from .models import Internship


class InternshipSerializer(serializers.ModelSerializer):
    recruiter_name = serializers.CharField(source='recruiter.username', read_only=True)
    requirements = serializers.ListField(child=serializers.CharField(max_length=500), required=False)
    responsibilities = serializers.ListField(child=serializers.CharField(max_length=500), required=False)
    skills = serializers.ListField(child=serializers.CharField(max_length=100), required=False)
    tags = serializers.ListField(child=serializers.CharField(max_length=50), required=False)
    is_expired = serializers.BooleanField(read_only=True)
    days_until_deadline = serializers.IntegerField(read_only=True)

    class Meta:
        model = Internship
        # moderation fields and counters are never client-writable
        fields = "__all__"
        read_only_fields = (
            "recruiter", "is_approved", "rejection_reason", "posted_at", "updated_at",
            "views", "applications_count",
        )

    def validate_skills(self, value):
        return [skill.strip() for skill in value if skill.strip()]

    def validate(self, attrs):
        def current(name):
            return attrs.get(name, getattr(self.instance, name, None))

        start, end = current('start_date'), current('end_date')
        if start and end and end < start:
            raise serializers.ValidationError({'end_date': "End date cannot be before start date"})

        low, high = current('stipend_min'), current('stipend_max')
        if low is not None and high is not None and high < low:
            raise serializers.ValidationError({'stipend_max': "Maximum stipend cannot be below the minimum"})
        return attrs


class InternshipListSerializer(serializers.ModelSerializer):
    """Card-sized representation for lists and search results"""
    recruiter_name = serializers.CharField(source='recruiter.username', read_only=True)

    class Meta:
        model = Internship
        fields = (
            "id", "title", "company", "recruiter", "recruiter_name", "location", "work_type",
            "duration", "stipend", "stipend_min", "stipend_max", "stipend_currency", "is_paid",
            "industry", "skills", "experience_level", "application_deadline", "posted_at",
            "views", "applications_count", "company_logo", "is_active", "is_approved",
        )
        read_only_fields = fields


class InternshipModerationSerializer(InternshipListSerializer):
    class Meta(InternshipListSerializer.Meta):
        fields = InternshipListSerializer.Meta.fields + ("rejection_reason",)
        read_only_fields = fields


class RejectInternshipSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=1000)
