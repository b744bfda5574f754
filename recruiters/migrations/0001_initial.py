import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='RecruiterProfile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('first_name', models.CharField(blank=True, default='', max_length=50)),
                ('last_name', models.CharField(blank=True, default='', max_length=50)),
                ('company', models.CharField(blank=True, db_index=True, default='', max_length=100)),
                ('position', models.CharField(blank=True, default='', max_length=100)),
                ('phone', models.CharField(blank=True, default='', max_length=20)),
                ('location', models.CharField(blank=True, default='', max_length=100)),
                ('bio', models.TextField(blank=True, default='', max_length=500)),
                ('avatar', models.CharField(blank=True, default='', max_length=500)),
                ('company_logo', models.CharField(blank=True, default='', max_length=500)),
                ('company_website', models.URLField(blank=True, default='')),
                ('company_size', models.CharField(blank=True, choices=[('1-10', '1-10'), ('11-50', '11-50'), ('51-200', '51-200'), ('201-500', '201-500'), ('501-1000', '501-1000'), ('1000+', '1000+')], default='', max_length=10)),
                ('industry', models.CharField(blank=True, db_index=True, default='', max_length=100)),
                ('linkedin', models.URLField(blank=True, default='')),
                ('website', models.URLField(blank=True, default='')),
                ('is_verified', models.BooleanField(default=False)),
                ('internships_posted', models.PositiveIntegerField(default=0)),
                ('applications_received', models.PositiveIntegerField(default=0)),
                ('candidates_hired', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='recruiter_profile', to=settings.AUTH_USER_MODEL)),
            ],
        ),
    ]
