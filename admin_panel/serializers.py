from rest_framework import serializers

from accounts.models import User
from .models import AdminActivity


class AdminActivitySerializer(serializers.ModelSerializer):
    admin_name = serializers.CharField(source='admin.username', read_only=True)

    class Meta:
        model = AdminActivity
        fields = ['id', 'admin', 'admin_name', 'action', 'model_name',
                  'object_id', 'description', 'ip_address', 'timestamp']


class AdminStudentSerializer(serializers.ModelSerializer):
    """Student account with the headline profile fields"""
    first_name = serializers.CharField(source='student_profile.first_name', read_only=True, default='')
    last_name = serializers.CharField(source='student_profile.last_name', read_only=True, default='')
    location = serializers.CharField(source='student_profile.location', read_only=True, default='')
    skills = serializers.SerializerMethodField()
    stats = serializers.DictField(source='student_profile.stats', read_only=True, default=None)

    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'is_active', 'date_joined', 'last_login',
                  'first_name', 'last_name', 'location', 'skills', 'stats']

    def get_skills(self, obj):
        profile = getattr(obj, 'student_profile', None)
        if profile is None:
            return []
        return [{'name': skill.name, 'proficiency': skill.proficiency, 'score': skill.score}
                for skill in profile.skills.all()]
