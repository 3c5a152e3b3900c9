from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='ConfigSetting',
            fields=[
                ('id', models.AutoField(auto_created=True,
                                        primary_key=True,
                                        serialize=False,
                                        verbose_name='ID')),
                ('name', models.CharField(
                    help_text='The name of the setting.',
                    max_length=255,
                    unique=True)),
                ('value', models.TextField(
                    blank=True,
                    help_text='The stored value of the setting.')),
            ],
            options={
                'verbose_name': 'Forum setting',
                'verbose_name_plural': 'Forum settings',
                'db_table': 'djforum_config',
                'ordering': ('name',),
            },
        ),
    ]
