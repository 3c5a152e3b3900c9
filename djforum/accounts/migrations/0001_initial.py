import djforum.accounts.models
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='ForumUser',
            fields=[
                ('id', models.AutoField(auto_created=True,
                                        primary_key=True,
                                        serialize=False,
                                        verbose_name='ID')),
                ('inherited_id', models.PositiveIntegerField(
                    blank=True,
                    help_text='The ID of the host application user this '
                              'account belongs to.',
                    null=True,
                    unique=True)),
                ('username', models.CharField(
                    help_text='The name shown for the user in the forum.',
                    max_length=255,
                    null=True,
                    unique=True)),
                ('email', models.EmailField(
                    help_text='The e-mail address used for forum '
                              'notifications.',
                    max_length=255,
                    null=True)),
                ('status', models.PositiveSmallIntegerField(
                    choices=[(1, 'Registered'), (9, 'Banned'),
                             (10, 'Active')],
                    db_index=True,
                    default=1)),
                ('role', models.PositiveSmallIntegerField(
                    choices=[(1, 'Member'), (9, 'Moderator'),
                             (10, 'Administrator')],
                    default=1)),
                ('timezone', models.CharField(
                    blank=True,
                    default='UTC',
                    help_text='The time zone used to show dates to the '
                              'user.',
                    max_length=255,
                    null=True,
                    validators=[djforum.accounts.models.validate_timezone])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Forum user',
                'verbose_name_plural': 'Forum users',
                'db_table': 'djforum_user',
            },
        ),
    ]
