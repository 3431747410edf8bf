import uuid
from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator


UNCATEGORIZED = "uncategorized"


def new_id():
    return str(uuid.uuid4())


# ---------------------------------------------------------------------------
# Standalone media library
# ---------------------------------------------------------------------------

class MediaAsset(models.Model):
    id = models.CharField(primary_key=True, max_length=64, default=new_id, editable=False)
    public_url = models.URLField(max_length=1024)
    storage_path = models.CharField(max_length=512, blank=True, null=True, db_index=True)
    type = models.CharField(
        max_length=10,
        choices=[("image", "Image"), ("video", "Video")],
        default="image",
        db_index=True,
    )
    caption = models.TextField(blank=True, default="")
    tags = models.JSONField(default=list, blank=True)
    width = models.PositiveIntegerField(null=True, blank=True)
    height = models.PositiveIntegerField(null=True, blank=True)
    sort_order = models.IntegerField(default=0, db_index=True)
    is_published = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = "media_assets"
        ordering = ["sort_order", "-created_at"]

    def __str__(self):
        return self.caption or self.storage_path or self.id


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------

class BundleCategory(models.Model):
    id = models.CharField(primary_key=True, max_length=120)  # slug
    label = models.CharField(max_length=255)
    icon_slug = models.CharField(max_length=100, blank=True, null=True)
    sort_order = models.IntegerField(default=0, db_index=True)
    is_public = models.BooleanField(default=True, db_index=True)
    user_id = models.CharField(max_length=100, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "bundle_categories"
        ordering = ["sort_order", "label"]
        verbose_name_plural = "Bundle categories"

    def __str__(self):
        return self.label


class DesignCategory(models.Model):
    slug = models.CharField(primary_key=True, max_length=120)
    label = models.CharField(max_length=255)
    icon_slug = models.CharField(max_length=100, blank=True, null=True)
    sort_order = models.IntegerField(default=0, db_index=True)
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "design_categories"
        ordering = ["sort_order", "label"]
        verbose_name_plural = "Design categories"

    def __str__(self):
        return self.label


# ---------------------------------------------------------------------------
# Catalog: bundles and print designs
# category_id is a plain slug column, never a FK: reassignment keeps it valid.
# ---------------------------------------------------------------------------

class Bundle(models.Model):
    id = models.CharField(primary_key=True, max_length=64, default=new_id, editable=False)
    title = models.CharField(max_length=255, db_index=True)
    blurb = models.TextField(blank=True, default="")
    price_from = models.CharField(max_length=64, blank=True, null=True)
    category_id = models.CharField(max_length=120, default=UNCATEGORIZED, db_index=True)
    thumb_url = models.URLField(max_length=1024, blank=True, null=True)
    thumb_storage_path = models.CharField(max_length=512, blank=True, null=True)
    sort_order = models.IntegerField(default=0, db_index=True)
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = "bundles"
        ordering = ["-created_at"]

    def __str__(self):
        return self.title


class BundleImage(models.Model):
    id = models.CharField(primary_key=True, max_length=64, default=new_id, editable=False)
    bundle = models.ForeignKey(Bundle, on_delete=models.CASCADE, related_name="images")
    image_url = models.URLField(max_length=1024)
    storage_path = models.CharField(max_length=512, blank=True, null=True)
    sort_order = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "bundle_images"
        ordering = ["sort_order", "created_at"]


class BundleFile(models.Model):
    id = models.CharField(primary_key=True, max_length=64, default=new_id, editable=False)
    bundle = models.ForeignKey(Bundle, on_delete=models.CASCADE, related_name="files")
    label = models.CharField(max_length=255, blank=True, default="")
    file_url = models.URLField(max_length=1024)
    mime_type = models.CharField(max_length=120, blank=True, null=True)
    storage_path = models.CharField(max_length=512, blank=True, null=True)
    sort_order = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "bundle_files"
        ordering = ["sort_order", "created_at"]


class PrintDesign(models.Model):
    id = models.CharField(primary_key=True, max_length=64, default=new_id, editable=False)
    title = models.CharField(max_length=255, db_index=True)
    blurb = models.TextField(blank=True, default="")
    price_from = models.CharField(max_length=64, blank=True, null=True)
    category_id = models.CharField(max_length=120, default=UNCATEGORIZED, db_index=True)
    thumb_url = models.URLField(max_length=1024, blank=True, null=True)
    thumb_storage_path = models.CharField(max_length=512, blank=True, null=True)
    sort_order = models.IntegerField(default=0, db_index=True)
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = "print_designs"
        ordering = ["sort_order", "-created_at"]

    def __str__(self):
        return self.title


class DesignImage(models.Model):
    id = models.CharField(primary_key=True, max_length=64, default=new_id, editable=False)
    design = models.ForeignKey(PrintDesign, on_delete=models.CASCADE, related_name="images")
    image_url = models.URLField(max_length=1024)
    storage_path = models.CharField(max_length=512, blank=True, null=True)
    sort_order = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "print_design_images"
        ordering = ["sort_order", "created_at"]


class DesignFile(models.Model):
    id = models.CharField(primary_key=True, max_length=64, default=new_id, editable=False)
    design = models.ForeignKey(PrintDesign, on_delete=models.CASCADE, related_name="files")
    label = models.CharField(max_length=255, blank=True, default="")
    file_url = models.URLField(max_length=1024)
    mime_type = models.CharField(max_length=120, blank=True, null=True)
    storage_path = models.CharField(max_length=512, blank=True, null=True)
    sort_order = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "print_design_files"
        ordering = ["sort_order", "created_at"]


# ---------------------------------------------------------------------------
# Homepage hero, theme and tagline
# ---------------------------------------------------------------------------

HERO_SLOTS = [("main", "Main"), ("side", "Side")]


class HeroMediaItem(models.Model):
    id = models.CharField(primary_key=True, max_length=64, default=new_id, editable=False)
    slot = models.CharField(max_length=10, choices=HERO_SLOTS, db_index=True)
    label = models.CharField(max_length=255, blank=True, default="")
    kind = models.CharField(
        max_length=10,
        choices=[("video", "Video"), ("image", "Image")],
        default="image",
    )
    storage_path = models.CharField(max_length=512)
    is_default = models.BooleanField(default=False)
    is_protected = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = "site_hero_media_items"
        ordering = ["slot", "-is_default", "created_at"]

    def __str__(self):
        return f"{self.slot}: {self.label or self.storage_path}"


class HeroMediaConfig(models.Model):
    """
    Hard singleton: which hero item each slot shows.
    Enforced via a unique, constant lock field.
    """
    selected_main = models.CharField(max_length=64, blank=True, null=True)
    selected_side = models.CharField(max_length=64, blank=True, null=True)
    singleton_lock = models.CharField(
        max_length=1, default="X", unique=True, editable=False, db_index=True
    )
    updated_at = models.DateTimeField(auto_now=True, db_index=True)

    class Meta:
        db_table = "site_hero_media_config"
        verbose_name = "Hero media config"
        verbose_name_plural = "Hero media config"


THEME_KINDS = [
    ("gradient", "Gradient"),
    ("solid", "Solid"),
    ("custom-gradient", "Custom gradient"),
    ("custom-solid", "Custom solid"),
]


class HeroTheme(models.Model):
    kind = models.CharField(max_length=20, choices=THEME_KINDS, default="gradient")
    solid_color = models.CharField(max_length=32, blank=True, null=True)
    from_color = models.CharField(max_length=32, blank=True, null=True)
    to_color = models.CharField(max_length=32, blank=True, null=True)
    updated_by = models.CharField(max_length=100, blank=True, null=True)
    updated_at = models.DateTimeField(auto_now=True, db_index=True)

    class Meta:
        db_table = "site_hero_theme"


class SiteTagline(models.Model):
    main_text = models.CharField(max_length=40, blank=True, null=True)
    sub_text = models.CharField(max_length=28, blank=True, null=True)
    font_id = models.CharField(max_length=40, blank=True, null=True)
    singleton_lock = models.CharField(
        max_length=1, default="X", unique=True, editable=False, db_index=True
    )
    updated_at = models.DateTimeField(auto_now=True, db_index=True)

    class Meta:
        db_table = "site_tagline"

    def __str__(self):
        return self.main_text or "Site Tagline"


class SiteSettings(models.Model):
    """Keyed row (id=1) holding social reach counters."""
    id = models.PositiveSmallIntegerField(primary_key=True, default=1)
    instagram_url = models.URLField(max_length=500, blank=True, null=True)
    instagram_followers = models.PositiveIntegerField(blank=True, null=True)
    facebook_url = models.URLField(max_length=500, blank=True, null=True)
    facebook_followers = models.PositiveIntegerField(blank=True, null=True)
    x_url = models.URLField(max_length=500, blank=True, null=True)
    x_followers = models.PositiveIntegerField(blank=True, null=True)
    social_updated_at = models.DateTimeField(blank=True, null=True)

    class Meta:
        db_table = "site_settings"
        verbose_name_plural = "Site settings"


# ---------------------------------------------------------------------------
# FAQ bot
# ---------------------------------------------------------------------------

class Faq(models.Model):
    id = models.CharField(primary_key=True, max_length=120)  # slug
    questions = models.JSONField(default=list)
    answer = models.TextField()
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "faqs"
        ordering = ["id"]

    def __str__(self):
        return self.id


class FaqBotSettings(models.Model):
    id = models.CharField(primary_key=True, max_length=40, default="default")
    greeting = models.TextField(blank=True, default="")
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "faq_bot_settings"
        verbose_name_plural = "FAQ bot settings"


# ---------------------------------------------------------------------------
# Reviews, notes and analytics
# ---------------------------------------------------------------------------

class CustomerReview(models.Model):
    id = models.CharField(primary_key=True, max_length=64, default=new_id, editable=False)
    name = models.CharField(max_length=255, db_index=True)
    quote = models.TextField()
    # Whole-star scale to match the site UI
    stars = models.PositiveSmallIntegerField(
        default=5,
        validators=[MinValueValidator(1), MaxValueValidator(5)],
    )
    sort_order = models.IntegerField(default=0, db_index=True)
    is_published = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "customer_reviews"
        ordering = ["sort_order", "-created_at"]

    def __str__(self):
        return f"{self.name} ({self.stars}★)"


class DashboardNote(models.Model):
    id = models.CharField(primary_key=True, max_length=64, default=new_id, editable=False)
    user_id = models.CharField(max_length=100, db_index=True)
    note_date = models.DateField(db_index=True)
    content = models.TextField()
    source = models.CharField(max_length=20, default="dashboard")
    folder_slug = models.CharField(max_length=120, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "dashboard_notes"
        ordering = ["-note_date", "-created_at"]


class AnalyticsSession(models.Model):
    session_id = models.CharField(max_length=64, db_index=True)
    path = models.CharField(max_length=1024, blank=True, null=True)
    user_agent = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = "analytics_sessions"
