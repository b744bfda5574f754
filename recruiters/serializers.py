from rest_framework import serializers
from .models import RecruiterProfile


class RecruiterProfileSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source='user.username', read_only=True)
    email = serializers.EmailField(source='user.email', read_only=True)
    full_name = serializers.CharField(read_only=True)
    stats = serializers.DictField(read_only=True)

    class Meta:
        model = RecruiterProfile
        fields = [
            'id', 'user', 'username', 'email', 'first_name', 'last_name', 'full_name',
            'company', 'position', 'phone', 'location', 'bio', 'avatar',
            'company_logo', 'company_website', 'company_size', 'industry',
            'linkedin', 'website', 'is_verified', 'stats', 'created_at', 'updated_at',
        ]
        # verification and counters are never client-writable
        read_only_fields = ['id', 'user', 'is_verified', 'created_at', 'updated_at']


class RecruiterSummarySerializer(serializers.ModelSerializer):
    username = serializers.CharField(source='user.username', read_only=True)
    email = serializers.EmailField(source='user.email', read_only=True)
    is_active = serializers.BooleanField(source='user.is_active', read_only=True)

    class Meta:
        model = RecruiterProfile
        fields = [
            'id', 'user', 'username', 'email', 'is_active', 'first_name', 'last_name',
            'company', 'industry', 'is_verified', 'internships_posted',
            'applications_received', 'candidates_hired', 'created_at',
        ]
        read_only_fields = fields
