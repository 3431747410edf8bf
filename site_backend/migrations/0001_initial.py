import django.core.validators
import django.db.models.deletion
from django.db import migrations, models

import site_backend.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='MediaAsset',
            fields=[
                ('id', models.CharField(default=site_backend.models.new_id, editable=False, max_length=64, primary_key=True, serialize=False)),
                ('public_url', models.URLField(max_length=1024)),
                ('storage_path', models.CharField(blank=True, db_index=True, max_length=512, null=True)),
                ('type', models.CharField(choices=[('image', 'Image'), ('video', 'Video')], db_index=True, default='image', max_length=10)),
                ('caption', models.TextField(blank=True, default='')),
                ('tags', models.JSONField(blank=True, default=list)),
                ('width', models.PositiveIntegerField(blank=True, null=True)),
                ('height', models.PositiveIntegerField(blank=True, null=True)),
                ('sort_order', models.IntegerField(db_index=True, default=0)),
                ('is_published', models.BooleanField(db_index=True, default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
            ],
            options={
                'db_table': 'media_assets',
                'ordering': ['sort_order', '-created_at'],
            },
        ),
        migrations.CreateModel(
            name='BundleCategory',
            fields=[
                ('id', models.CharField(max_length=120, primary_key=True, serialize=False)),
                ('label', models.CharField(max_length=255)),
                ('icon_slug', models.CharField(blank=True, max_length=100, null=True)),
                ('sort_order', models.IntegerField(db_index=True, default=0)),
                ('is_public', models.BooleanField(db_index=True, default=True)),
                ('user_id', models.CharField(blank=True, max_length=100, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'bundle_categories',
                'ordering': ['sort_order', 'label'],
                'verbose_name_plural': 'Bundle categories',
            },
        ),
        migrations.CreateModel(
            name='DesignCategory',
            fields=[
                ('slug', models.CharField(max_length=120, primary_key=True, serialize=False)),
                ('label', models.CharField(max_length=255)),
                ('icon_slug', models.CharField(blank=True, max_length=100, null=True)),
                ('sort_order', models.IntegerField(db_index=True, default=0)),
                ('is_active', models.BooleanField(db_index=True, default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'design_categories',
                'ordering': ['sort_order', 'label'],
                'verbose_name_plural': 'Design categories',
            },
        ),
        migrations.CreateModel(
            name='Bundle',
            fields=[
                ('id', models.CharField(default=site_backend.models.new_id, editable=False, max_length=64, primary_key=True, serialize=False)),
                ('title', models.CharField(db_index=True, max_length=255)),
                ('blurb', models.TextField(blank=True, default='')),
                ('price_from', models.CharField(blank=True, max_length=64, null=True)),
                ('category_id', models.CharField(db_index=True, default='uncategorized', max_length=120)),
                ('thumb_url', models.URLField(blank=True, max_length=1024, null=True)),
                ('thumb_storage_path', models.CharField(blank=True, max_length=512, null=True)),
                ('sort_order', models.IntegerField(db_index=True, default=0)),
                ('is_active', models.BooleanField(db_index=True, default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
            ],
            options={
                'db_table': 'bundles',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='BundleImage',
            fields=[
                ('id', models.CharField(default=site_backend.models.new_id, editable=False, max_length=64, primary_key=True, serialize=False)),
                ('image_url', models.URLField(max_length=1024)),
                ('storage_path', models.CharField(blank=True, max_length=512, null=True)),
                ('sort_order', models.IntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('bundle', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='images', to='site_backend.bundle')),
            ],
            options={
                'db_table': 'bundle_images',
                'ordering': ['sort_order', 'created_at'],
            },
        ),
        migrations.CreateModel(
            name='BundleFile',
            fields=[
                ('id', models.CharField(default=site_backend.models.new_id, editable=False, max_length=64, primary_key=True, serialize=False)),
                ('label', models.CharField(blank=True, default='', max_length=255)),
                ('file_url', models.URLField(max_length=1024)),
                ('mime_type', models.CharField(blank=True, max_length=120, null=True)),
                ('storage_path', models.CharField(blank=True, max_length=512, null=True)),
                ('sort_order', models.IntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('bundle', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='files', to='site_backend.bundle')),
            ],
            options={
                'db_table': 'bundle_files',
                'ordering': ['sort_order', 'created_at'],
            },
        ),
        migrations.CreateModel(
            name='PrintDesign',
            fields=[
                ('id', models.CharField(default=site_backend.models.new_id, editable=False, max_length=64, primary_key=True, serialize=False)),
                ('title', models.CharField(db_index=True, max_length=255)),
                ('blurb', models.TextField(blank=True, default='')),
                ('price_from', models.CharField(blank=True, max_length=64, null=True)),
                ('category_id', models.CharField(db_index=True, default='uncategorized', max_length=120)),
                ('thumb_url', models.URLField(blank=True, max_length=1024, null=True)),
                ('thumb_storage_path', models.CharField(blank=True, max_length=512, null=True)),
                ('sort_order', models.IntegerField(db_index=True, default=0)),
                ('is_active', models.BooleanField(db_index=True, default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
            ],
            options={
                'db_table': 'print_designs',
                'ordering': ['sort_order', '-created_at'],
            },
        ),
        migrations.CreateModel(
            name='DesignImage',
            fields=[
                ('id', models.CharField(default=site_backend.models.new_id, editable=False, max_length=64, primary_key=True, serialize=False)),
                ('image_url', models.URLField(max_length=1024)),
                ('storage_path', models.CharField(blank=True, max_length=512, null=True)),
                ('sort_order', models.IntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('design', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='images', to='site_backend.printdesign')),
            ],
            options={
                'db_table': 'print_design_images',
                'ordering': ['sort_order', 'created_at'],
            },
        ),
        migrations.CreateModel(
            name='DesignFile',
            fields=[
                ('id', models.CharField(default=site_backend.models.new_id, editable=False, max_length=64, primary_key=True, serialize=False)),
                ('label', models.CharField(blank=True, default='', max_length=255)),
                ('file_url', models.URLField(max_length=1024)),
                ('mime_type', models.CharField(blank=True, max_length=120, null=True)),
                ('storage_path', models.CharField(blank=True, max_length=512, null=True)),
                ('sort_order', models.IntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('design', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='files', to='site_backend.printdesign')),
            ],
            options={
                'db_table': 'print_design_files',
                'ordering': ['sort_order', 'created_at'],
            },
        ),
        migrations.CreateModel(
            name='HeroMediaItem',
            fields=[
                ('id', models.CharField(default=site_backend.models.new_id, editable=False, max_length=64, primary_key=True, serialize=False)),
                ('slot', models.CharField(choices=[('main', 'Main'), ('side', 'Side')], db_index=True, max_length=10)),
                ('label', models.CharField(blank=True, default='', max_length=255)),
                ('kind', models.CharField(choices=[('video', 'Video'), ('image', 'Image')], default='image', max_length=10)),
                ('storage_path', models.CharField(max_length=512)),
                ('is_default', models.BooleanField(default=False)),
                ('is_protected', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
            ],
            options={
                'db_table': 'site_hero_media_items',
                'ordering': ['slot', '-is_default', 'created_at'],
            },
        ),
        migrations.CreateModel(
            name='HeroMediaConfig',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('selected_main', models.CharField(blank=True, max_length=64, null=True)),
                ('selected_side', models.CharField(blank=True, max_length=64, null=True)),
                ('singleton_lock', models.CharField(db_index=True, default='X', editable=False, max_length=1, unique=True)),
                ('updated_at', models.DateTimeField(auto_now=True, db_index=True)),
            ],
            options={
                'db_table': 'site_hero_media_config',
                'verbose_name': 'Hero media config',
                'verbose_name_plural': 'Hero media config',
            },
        ),
        migrations.CreateModel(
            name='HeroTheme',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('kind', models.CharField(choices=[('gradient', 'Gradient'), ('solid', 'Solid'), ('custom-gradient', 'Custom gradient'), ('custom-solid', 'Custom solid')], default='gradient', max_length=20)),
                ('solid_color', models.CharField(blank=True, max_length=32, null=True)),
                ('from_color', models.CharField(blank=True, max_length=32, null=True)),
                ('to_color', models.CharField(blank=True, max_length=32, null=True)),
                ('updated_by', models.CharField(blank=True, max_length=100, null=True)),
                ('updated_at', models.DateTimeField(auto_now=True, db_index=True)),
            ],
            options={
                'db_table': 'site_hero_theme',
            },
        ),
        migrations.CreateModel(
            name='SiteTagline',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('main_text', models.CharField(blank=True, max_length=40, null=True)),
                ('sub_text', models.CharField(blank=True, max_length=28, null=True)),
                ('font_id', models.CharField(blank=True, max_length=40, null=True)),
                ('singleton_lock', models.CharField(db_index=True, default='X', editable=False, max_length=1, unique=True)),
                ('updated_at', models.DateTimeField(auto_now=True, db_index=True)),
            ],
            options={
                'db_table': 'site_tagline',
            },
        ),
        migrations.CreateModel(
            name='SiteSettings',
            fields=[
                ('id', models.PositiveSmallIntegerField(default=1, primary_key=True, serialize=False)),
                ('instagram_url', models.URLField(blank=True, max_length=500, null=True)),
                ('instagram_followers', models.PositiveIntegerField(blank=True, null=True)),
                ('facebook_url', models.URLField(blank=True, max_length=500, null=True)),
                ('facebook_followers', models.PositiveIntegerField(blank=True, null=True)),
                ('x_url', models.URLField(blank=True, max_length=500, null=True)),
                ('x_followers', models.PositiveIntegerField(blank=True, null=True)),
                ('social_updated_at', models.DateTimeField(blank=True, null=True)),
            ],
            options={
                'db_table': 'site_settings',
                'verbose_name_plural': 'Site settings',
            },
        ),
        migrations.CreateModel(
            name='Faq',
            fields=[
                ('id', models.CharField(max_length=120, primary_key=True, serialize=False)),
                ('questions', models.JSONField(default=list)),
                ('answer', models.TextField()),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'faqs',
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='FaqBotSettings',
            fields=[
                ('id', models.CharField(default='default', max_length=40, primary_key=True, serialize=False)),
                ('greeting', models.TextField(blank=True, default='')),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'faq_bot_settings',
                'verbose_name_plural': 'FAQ bot settings',
            },
        ),
        migrations.CreateModel(
            name='CustomerReview',
            fields=[
                ('id', models.CharField(default=site_backend.models.new_id, editable=False, max_length=64, primary_key=True, serialize=False)),
                ('name', models.CharField(db_index=True, max_length=255)),
                ('quote', models.TextField()),
                ('stars', models.PositiveSmallIntegerField(default=5, validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(5)])),
                ('sort_order', models.IntegerField(db_index=True, default=0)),
                ('is_published', models.BooleanField(db_index=True, default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'customer_reviews',
                'ordering': ['sort_order', '-created_at'],
            },
        ),
        migrations.CreateModel(
            name='DashboardNote',
            fields=[
                ('id', models.CharField(default=site_backend.models.new_id, editable=False, max_length=64, primary_key=True, serialize=False)),
                ('user_id', models.CharField(db_index=True, max_length=100)),
                ('note_date', models.DateField(db_index=True)),
                ('content', models.TextField()),
                ('source', models.CharField(default='dashboard', max_length=20)),
                ('folder_slug', models.CharField(blank=True, max_length=120, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'dashboard_notes',
                'ordering': ['-note_date', '-created_at'],
            },
        ),
        migrations.CreateModel(
            name='AnalyticsSession',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('session_id', models.CharField(db_index=True, max_length=64)),
                ('path', models.CharField(blank=True, max_length=1024, null=True)),
                ('user_agent', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
            ],
            options={
                'db_table': 'analytics_sessions',
            },
        ),
    ]
