import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('courses', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='CourseFile',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('file_name', models.CharField(help_text='Original filename as uploaded', max_length=255)),
                ('file_size', models.BigIntegerField(help_text='File size in bytes')),
                ('file_type', models.CharField(help_text='Declared MIME type', max_length=255)),
                ('file_url', models.URLField(help_text='Public URL of the stored object', max_length=1024)),
                ('description', models.TextField(blank=True, null=True)),
                ('uploaded_at', models.DateTimeField(auto_now_add=True)),
                ('course', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='files', to='courses.course')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='course_files', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Course file',
                'verbose_name_plural': 'Course files',
                'ordering': ['-uploaded_at'],
                'indexes': [models.Index(fields=['course', '-uploaded_at'], name='files_course_recent_idx')],
                'constraints': [models.CheckConstraint(condition=models.Q(('file_size__gt', 0)), name='files_file_size_positive')],
            },
        ),
        migrations.CreateModel(
            name='MaterialReport',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('reason', models.CharField(max_length=50)),
                ('details', models.TextField(blank=True, null=True)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('reviewed', 'Reviewed'), ('dismissed', 'Dismissed')], db_index=True, default='pending', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('material', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='reports', to='files.coursefile')),
                ('reporter', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='material_reports', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Material report',
                'verbose_name_plural': 'Material reports',
                'ordering': ['-created_at'],
                'constraints': [models.UniqueConstraint(fields=('material', 'reporter'), name='reports_material_reporter_unique')],
            },
        ),
        migrations.CreateModel(
            name='StarredMaterial',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('starred_at', models.DateTimeField(auto_now_add=True)),
                ('file', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='stars', to='files.coursefile')),
                ('student', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='starred_materials', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Starred material',
                'verbose_name_plural': 'Starred materials',
                'ordering': ['-starred_at'],
                'constraints': [models.UniqueConstraint(fields=('student', 'file'), name='stars_student_file_unique')],
            },
        ),
    ]
