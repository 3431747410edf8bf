from django.urls import path

from .bundles import (
    BundleAddFileAPIView,
    BundleAddImageAPIView,
    BundleDeleteAPIView,
    BundleRemoveFileAPIView,
    BundleRemoveImageAPIView,
    BundleUpdateAPIView,
    BundleUploadAPIView,
    PublicBundleDetailAPIView,
    PublicBundleListAPIView,
)
from .category import (
    BundleCategoriesAPIView,
    DesignCategoriesAPIView,
    PublicBundleCategoriesAPIView,
    PublicDesignCategoriesAPIView,
)
from .designs import (
    DesignAddFileAPIView,
    DesignAddImageAPIView,
    DesignDeleteAPIView,
    DesignRemoveFileAPIView,
    DesignRemoveImageAPIView,
    DesignUploadAPIView,
    PublicDesignDetailAPIView,
    PublicDesignListAPIView,
)
from .faqs import (
    FaqAdminAPIView,
    FaqDeleteAPIView,
    FaqGreetingAPIView,
    FaqMatchAPIView,
    PublicFaqsAPIView,
)
from .hero_media import (
    HeroMediaItemDeleteAPIView,
    HeroMediaItemUploadAPIView,
    HeroMediaOverviewAPIView,
    HeroMediaSaveAPIView,
    HeroMediaSelectAPIView,
    PublicHeroMediaAPIView,
)
from .contact import ContactAPIView
from .integrations import AnalyticsTrackAPIView, VoiceNoteAPIView
from .media import (
    MediaDeleteAPIView,
    MediaGalleryAPIView,
    MediaLibraryAPIView,
    MediaReorderAPIView,
    MediaUpdateAPIView,
    MediaUploadAPIView,
)
from .reviews import PublicReviewsAPIView, ReviewDeleteAPIView, ReviewsAPIView
from .site_details import (
    PublicTaglineAPIView,
    PublicThemeAPIView,
    SocialReachAPIView,
    TaglineAPIView,
    ThemeAPIView,
)

urlpatterns = [
    # Categories
    path("bundle-categories/", BundleCategoriesAPIView.as_view(), name="bundle-categories"),
    path("design-categories/", DesignCategoriesAPIView.as_view(), name="design-categories"),

    # Bundles
    path("bundles/upload/", BundleUploadAPIView.as_view(), name="bundle-upload"),
    path("bundles/delete/", BundleDeleteAPIView.as_view(), name="bundle-delete"),
    path("bundles/add-image/", BundleAddImageAPIView.as_view(), name="bundle-add-image"),
    path("bundles/add-file/", BundleAddFileAPIView.as_view(), name="bundle-add-file"),
    path("bundles/remove-image/", BundleRemoveImageAPIView.as_view(), name="bundle-remove-image"),
    path("bundles/remove-file/", BundleRemoveFileAPIView.as_view(), name="bundle-remove-file"),
    path("bundles/<str:bundle_id>/", BundleUpdateAPIView.as_view(), name="bundle-update"),

    # Print designs
    path("designs/upload/", DesignUploadAPIView.as_view(), name="design-upload"),
    path("designs/delete/", DesignDeleteAPIView.as_view(), name="design-delete"),
    path("designs/add-image/", DesignAddImageAPIView.as_view(), name="design-add-image"),
    path("designs/add-file/", DesignAddFileAPIView.as_view(), name="design-add-file"),
    path("designs/remove-image/", DesignRemoveImageAPIView.as_view(), name="design-remove-image"),
    path("designs/remove-file/", DesignRemoveFileAPIView.as_view(), name="design-remove-file"),

    # Media library
    path("media/", MediaLibraryAPIView.as_view(), name="media-library"),
    path("media/upload/", MediaUploadAPIView.as_view(), name="media-upload"),
    path("media/delete/", MediaDeleteAPIView.as_view(), name="media-delete"),
    path("media/reorder/", MediaReorderAPIView.as_view(), name="media-reorder"),
    path("media/update/", MediaUpdateAPIView.as_view(), name="media-update"),
    path("media/gallery/", MediaGalleryAPIView.as_view(), name="media-gallery"),

    # Hero media
    path("admin/hero-media/overview/", HeroMediaOverviewAPIView.as_view(), name="hero-media-overview"),
    path("admin/hero-media/select/", HeroMediaSelectAPIView.as_view(), name="hero-media-select"),
    path("hero-media/save/", HeroMediaSaveAPIView.as_view(), name="hero-media-save"),
    path("hero-media/items/", HeroMediaItemUploadAPIView.as_view(), name="hero-media-item-upload"),
    path("hero-media/items/<str:item_id>/", HeroMediaItemDeleteAPIView.as_view(), name="hero-media-item-delete"),

    # Site details
    path("theme/", ThemeAPIView.as_view(), name="theme"),
    path("tagline/", TaglineAPIView.as_view(), name="tagline"),
    path("dashboard/social-reach/", SocialReachAPIView.as_view(), name="social-reach"),

    # Reviews
    path("reviews/", ReviewsAPIView.as_view(), name="reviews"),
    path("reviews/<str:review_id>/", ReviewDeleteAPIView.as_view(), name="review-delete"),

    # FAQ bot
    path("faqs/", FaqAdminAPIView.as_view(), name="faqs"),
    path("faqs/greeting/", FaqGreetingAPIView.as_view(), name="faq-greeting"),
    path("faqs/<str:faq_id>/", FaqDeleteAPIView.as_view(), name="faq-delete"),

    # Integrations
    path("voice-note/", VoiceNoteAPIView.as_view(), name="voice-note"),
    path("analytics/track/", AnalyticsTrackAPIView.as_view(), name="analytics-track"),
    path("contact/", ContactAPIView.as_view(), name="contact"),

    # Public site
    path("public/bundle-categories/", PublicBundleCategoriesAPIView.as_view(), name="public-bundle-categories"),
    path("public/design-categories/", PublicDesignCategoriesAPIView.as_view(), name="public-design-categories"),
    path("public/bundles/", PublicBundleListAPIView.as_view(), name="public-bundles"),
    path("public/bundles/<str:item_id>/", PublicBundleDetailAPIView.as_view(), name="public-bundle-detail"),
    path("public/designs/", PublicDesignListAPIView.as_view(), name="public-designs"),
    path("public/designs/<str:item_id>/", PublicDesignDetailAPIView.as_view(), name="public-design-detail"),
    path("public/reviews/", PublicReviewsAPIView.as_view(), name="public-reviews"),
    path("public/hero-media/", PublicHeroMediaAPIView.as_view(), name="public-hero-media"),
    path("public/theme/", PublicThemeAPIView.as_view(), name="public-theme"),
    path("public/tagline/", PublicTaglineAPIView.as_view(), name="public-tagline"),
    path("public/faqs/", PublicFaqsAPIView.as_view(), name="public-faqs"),
    path("public/faqs/match/", FaqMatchAPIView.as_view(), name="public-faq-match"),
]
