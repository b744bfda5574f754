import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Internship',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=100)),
                ('company', models.CharField(db_index=True, max_length=100)),
                ('description', models.TextField(max_length=2000)),
                ('requirements', models.JSONField(blank=True, default=list)),
                ('responsibilities', models.JSONField(blank=True, default=list)),
                ('skills', models.JSONField(blank=True, default=list)),
                ('tags', models.JSONField(blank=True, default=list)),
                ('location', models.CharField(db_index=True, max_length=100)),
                ('work_type', models.CharField(choices=[('onsite', 'Onsite'), ('remote', 'Remote'), ('hybrid', 'Hybrid')], max_length=10)),
                ('duration', models.CharField(max_length=50)),
                ('start_date', models.DateField()),
                ('end_date', models.DateField(blank=True, null=True)),
                ('stipend', models.CharField(blank=True, default='', max_length=100)),
                ('stipend_min', models.PositiveIntegerField(blank=True, null=True)),
                ('stipend_max', models.PositiveIntegerField(blank=True, null=True)),
                ('stipend_currency', models.CharField(default='USD', max_length=3)),
                ('is_paid', models.BooleanField(default=False)),
                ('industry', models.CharField(db_index=True, max_length=100)),
                ('application_deadline', models.DateTimeField(db_index=True)),
                ('openings', models.PositiveIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)])),
                ('experience_level', models.CharField(choices=[('entry-level', 'Entry level'), ('intermediate', 'Intermediate'), ('advanced', 'Advanced')], default='entry-level', max_length=20)),
                ('company_logo', models.CharField(blank=True, default='', max_length=500)),
                ('company_website', models.URLField(blank=True, default='')),
                ('is_active', models.BooleanField(default=True)),
                ('is_approved', models.BooleanField(default=False)),
                ('rejection_reason', models.TextField(blank=True, default='')),
                ('posted_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('views', models.PositiveIntegerField(default=0)),
                ('applications_count', models.PositiveIntegerField(default=0)),
                ('recruiter', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='internships', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-posted_at'],
            },
        ),
    ]
