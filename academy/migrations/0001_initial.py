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
            name="Course",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(help_text="Title of the course", max_length=200, verbose_name="Course Title")),
                ("description", models.TextField(blank=True, verbose_name="Description")),
                ("price", models.DecimalField(decimal_places=2, help_text="Tuition cost in the store currency", max_digits=12, verbose_name="Price")),
                ("category", models.CharField(choices=[("video", "Video"), ("book", "Book")], default="video", max_length=10, verbose_name="Category")),
                ("url", models.URLField(blank=True, verbose_name="Course URL")),
                ("thumbnail", models.CharField(default="no-photo.jpg", max_length=255, verbose_name="Thumbnail")),
                ("status", models.CharField(choices=[("drafted", "Drafted"), ("published", "Published")], default="published", max_length=10, verbose_name="Status")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Course",
                "verbose_name_plural": "Courses",
                "db_table": "academy_course",
                "ordering": ["title"],
            },
        ),
        migrations.CreateModel(
            name="Profile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("full_name", models.CharField(blank=True, max_length=200, verbose_name="Full Name")),
                ("role", models.CharField(choices=[("user", "User"), ("admin", "Admin"), ("super_admin", "Super Admin")], default="user", max_length=20, verbose_name="Role")),
                ("welcomed_at", models.DateTimeField(blank=True, help_text="Set once the first-purchase welcome message was sent", null=True, verbose_name="Welcomed At")),
                ("user", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="profile", to=settings.AUTH_USER_MODEL, verbose_name="User")),
            ],
            options={
                "verbose_name": "User Profile",
                "verbose_name_plural": "User Profiles",
                "db_table": "academy_profile",
            },
        ),
        migrations.CreateModel(
            name="CourseEnrollment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("source", models.CharField(choices=[("funds_confirmed", "Funds Confirmed"), ("admin", "Admin")], default="funds_confirmed", max_length=20)),
                ("reference", models.CharField(blank=True, max_length=100)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("course", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="enrollments", to="academy.course")),
                ("profile", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="enrollments", to="academy.profile")),
            ],
            options={
                "verbose_name": "Course Enrollment",
                "verbose_name_plural": "Course Enrollments",
                "db_table": "academy_course_enrollment",
            },
        ),
        migrations.AddConstraint(
            model_name="courseenrollment",
            constraint=models.UniqueConstraint(fields=("profile", "course"), name="unique_profile_course"),
        ),
        migrations.AddField(
            model_name="profile",
            name="courses",
            field=models.ManyToManyField(blank=True, related_name="owners", through="academy.CourseEnrollment", to="academy.course", verbose_name="Owned Courses"),
        ),
    ]
