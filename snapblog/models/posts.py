"""
Post and Like models for snapblog.
"""
import logging

from django.conf import settings
from django.core.exceptions import PermissionDenied
from django.db import models, transaction
from django.db.models import Count, Prefetch
from django.utils import timezone

from ..conf import blog_settings
from .comments import Comment

logger = logging.getLogger(__name__)


class PostQuerySet(models.QuerySet):
    def for_listing(self):
        """
        Return all posts newest first, with everything the list page shows.

        Author and comment authors are fetched in bulk and ``like_count``
        is annotated on each post.
        """
        return (
            self.select_related("author")
            .prefetch_related(
                Prefetch(
                    "comments",
                    queryset=Comment.objects.select_related("author"),
                ),
            )
            .annotate(like_count=Count("like_set", distinct=True))
            .order_by("-created_at")
        )


class PostManager(models.Manager.from_queryset(PostQuerySet)):
    def create_post(self, author, title, caption="", hashtag="", image=None):
        """
        Create a post owned by ``author``.

        ``image`` is the reference returned by the media storage, never
        the uploaded file itself.
        """
        post = self.create(
            author=author,
            title=title,
            caption=caption,
            hashtag=hashtag,
            image=image or "",
        )
        logger.info("Post %s created by %s", post.pk, author.username)
        return post


class Post(models.Model):
    """
    Blog post with an optional image.

    Likes are an ordered set of users (at most one like per user), stored
    through ``Like``. Comments hang off the post through ``Comment.post``.
    """

    title = models.CharField(max_length=blog_settings.TITLE_MAX_LENGTH)
    caption = models.TextField(blank=True)
    hashtag = models.CharField(
        max_length=255,
        blank=True,
        help_text="Free-form tag text, e.g. '#travel #food'",
    )
    image = models.CharField(
        max_length=500,
        blank=True,
        help_text="Reference returned by media storage (local path or remote URL)",
    )

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="snapblog_posts",
    )
    likes = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        through="Like",
        related_name="liked_snapblog_posts",
        blank=True,
    )

    created_at = models.DateTimeField(db_index=True)

    objects = PostManager()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["author", "-created_at"], name="snapblog_post_author_created"),
        ]

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        # Set created_at if not set
        if not self.created_at:
            self.created_at = timezone.now()
        super().save(*args, **kwargs)

    @property
    def has_image(self):
        return bool(self.image)

    def is_liked_by(self, user):
        """Check whether ``user`` currently likes this post."""
        if not user.is_authenticated:
            return False
        return self.like_set.filter(user=user).exists()

    def toggle_like(self, user):
        """
        Toggle ``user``'s like on this post.

        If the user already likes the post, the like is removed;
        otherwise it is added.

        Returns (liked, like_count)
        """
        with transaction.atomic():
            removed, _ = Like.objects.filter(post=self, user=user).delete()
            if not removed:
                Like.objects.create(post=self, user=user)
            count = self.like_set.count()
        return not removed, count

    def add_comment(self, author, content):
        """Append a comment by ``author`` and return it."""
        return Comment.objects.create(post=self, author=author, content=content)

    def delete_by(self, user):
        """
        Delete the post on behalf of ``user``.

        Raises PermissionDenied unless ``user`` is the author. Comments and
        likes are removed with the post.
        """
        if self.author_id != user.pk:
            logger.warning(
                "User %s tried to delete post %s owned by user %s",
                user.pk,
                self.pk,
                self.author_id,
            )
            raise PermissionDenied("Only the author can delete this post.")
        post_id = self.pk
        self.delete()
        logger.info("Post %s deleted by %s", post_id, user.username)


class Like(models.Model):
    """
    One user's like on one post.

    The (post, user) pair is unique so a user appears in a post's like
    set at most once.
    """

    post = models.ForeignKey(
        Post,
        on_delete=models.CASCADE,
        related_name="like_set",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="snapblog_likes",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ["post", "user"]
        ordering = ["created_at", "pk"]

    def __str__(self):
        return f"{self.user} likes {self.post}"
