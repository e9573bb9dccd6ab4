"""
Django admin configuration for snapblog.
"""
from django.contrib import admin
from django.utils.html import format_html

from .models import Comment, Like, Post


class CommentInline(admin.TabularInline):
    """Read-only list of a post's comments."""

    model = Comment
    extra = 0
    raw_id_fields = ["author"]
    fields = ["author", "content", "created_at"]
    readonly_fields = ["created_at"]


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    list_display = [
        "title",
        "author",
        "hashtag",
        "image_preview",
        "like_total",
        "created_at",
    ]
    list_filter = ["created_at"]
    search_fields = ["title", "caption", "hashtag", "author__username"]
    raw_id_fields = ["author"]
    date_hierarchy = "created_at"
    inlines = [CommentInline]
    readonly_fields = ["created_at"]

    @admin.display(description="Image")
    def image_preview(self, obj):
        if not obj.image:
            return "-"
        return format_html('<img src="{}" style="max-height: 40px;" />', obj.image)

    @admin.display(description="Likes")
    def like_total(self, obj):
        return obj.like_set.count()


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ["preview", "author", "post", "created_at"]
    list_filter = ["created_at"]
    search_fields = ["content", "author__username", "post__title"]
    raw_id_fields = ["author", "post"]
    readonly_fields = ["created_at"]


@admin.register(Like)
class LikeAdmin(admin.ModelAdmin):
    list_display = ["user", "post", "created_at"]
    raw_id_fields = ["user", "post"]
    readonly_fields = ["created_at"]
