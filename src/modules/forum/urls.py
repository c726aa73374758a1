"""Forum URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.forum.views import ForumPostViewSet

router = DefaultRouter(trailing_slash=True)
router.register("forum", ForumPostViewSet, basename="forum-post")

urlpatterns = router.urls
