from django.contrib import admin
from .models import (
    MediaAsset,
    BundleCategory, DesignCategory,
    Bundle, BundleImage, BundleFile,
    PrintDesign, DesignImage, DesignFile,
    HeroMediaItem, HeroMediaConfig, HeroTheme, SiteTagline, SiteSettings,
    Faq, FaqBotSettings,
    CustomerReview, DashboardNote, AnalyticsSession,
)

admin.site.register(MediaAsset)

admin.site.register(BundleCategory)
admin.site.register(DesignCategory)


class BundleImageInline(admin.TabularInline):
    model = BundleImage
    extra = 0


class BundleFileInline(admin.TabularInline):
    model = BundleFile
    extra = 0


@admin.register(Bundle)
class BundleAdmin(admin.ModelAdmin):
    list_display = ("title", "category_id", "is_active", "created_at")
    list_filter = ("is_active", "category_id")
    search_fields = ("title", "blurb")
    inlines = [BundleImageInline, BundleFileInline]


class DesignImageInline(admin.TabularInline):
    model = DesignImage
    extra = 0


class DesignFileInline(admin.TabularInline):
    model = DesignFile
    extra = 0


@admin.register(PrintDesign)
class PrintDesignAdmin(admin.ModelAdmin):
    list_display = ("title", "category_id", "sort_order", "is_active")
    list_filter = ("is_active", "category_id")
    search_fields = ("title", "blurb")
    inlines = [DesignImageInline, DesignFileInline]


admin.site.register(HeroMediaItem)
admin.site.register(HeroMediaConfig)
admin.site.register(HeroTheme)
admin.site.register(SiteTagline)
admin.site.register(SiteSettings)

admin.site.register(Faq)
admin.site.register(FaqBotSettings)

admin.site.register(CustomerReview)
admin.site.register(DashboardNote)
admin.site.register(AnalyticsSession)
