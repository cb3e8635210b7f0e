from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Video',
            fields=[
                ('video_id', models.CharField(max_length=64, primary_key=True, serialize=False)),
                ('title', models.CharField(blank=True, max_length=500)),
                ('channel_id', models.CharField(blank=True, max_length=64)),
                ('channel_title', models.CharField(blank=True, max_length=200)),
                ('duration_seconds', models.IntegerField(default=0)),
                ('local_path', models.CharField(blank=True, max_length=1024)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['-updated_at'],
                'indexes': [models.Index(fields=['channel_title'], name='tracks_vide_channel_5b1c9e_idx')],
            },
        ),
    ]
