"""
Tests for snapblog views.
"""
import re
from pathlib import Path
from unittest import mock

import pytest
from django.contrib.auth import get_user_model
from django.contrib.messages import get_messages
from django.core.files.uploadedfile import SimpleUploadedFile
from django.db import DatabaseError
from django.test import Client

from snapblog.conf import blog_settings
from snapblog.models import Comment, Post
from snapblog.storage import MediaUploadError

User = get_user_model()


def flashed(response):
    return [str(m) for m in get_messages(response.wsgi_request)]


class TestAuth:
    """Signup, login and logout."""

    def test_index_redirects_to_posts(self, client):
        response = client.get("/")
        assert response.status_code == 302
        assert response.url == "/posts"

    def test_signup_page_renders(self, client, db):
        response = client.get("/signup")
        assert response.status_code == 200
        assert b'name="username"' in response.content

    def test_signup_creates_user_and_logs_in(self, client, db):
        """Test signup stores a hashed password and starts a session."""
        response = client.post("/signup", {"username": "carol", "password": "secret"})

        assert response.status_code == 302
        assert response.url == "/posts"
        carol = User.objects.get(username="carol")
        assert carol.password != "secret"
        assert carol.check_password("secret")
        assert client.session["_auth_user_id"] == str(carol.pk)

    def test_signup_duplicate_username(self, client, user):
        """Test a taken username never creates a second account."""
        response = client.post("/signup", {"username": "alice", "password": "pw2"})

        assert response.status_code == 302
        assert response.url == "/signup"
        assert "Username already exists." in flashed(response)
        assert User.objects.filter(username="alice").count() == 1
        assert "_auth_user_id" not in client.session
        assert client.login(username="alice", password="pw1")

    def test_signup_database_error(self, client, db):
        """Test unexpected storage errors are flashed as a generic failure."""
        with mock.patch("snapblog.forms.SignupForm.save", side_effect=DatabaseError("down")):
            response = client.post("/signup", {"username": "dave", "password": "x"})

        assert response.url == "/signup"
        assert "Signup failed." in flashed(response)

    def test_login_page_renders(self, client, db):
        response = client.get("/login")
        assert response.status_code == 200

    def test_login_success(self, client, user):
        response = client.post("/login", {"username": "alice", "password": "pw1"})

        assert response.status_code == 302
        assert response.url == "/posts"
        assert client.session["_auth_user_id"] == str(user.pk)

    def test_login_wrong_password(self, client, user):
        """Test a wrong password never establishes a session."""
        response = client.post("/login", {"username": "alice", "password": "nope"})

        assert response.status_code == 302
        assert response.url == "/login"
        assert "Invalid credentials" in flashed(response)
        assert "_auth_user_id" not in client.session

    def test_login_unknown_user(self, client, db):
        response = client.post("/login", {"username": "ghost", "password": "pw"})

        assert response.url == "/login"
        assert "Invalid credentials" in flashed(response)

    def test_login_follows_safe_next(self, client, user):
        response = client.post(
            "/login",
            {"username": "alice", "password": "pw1", "next": "/posts/new"},
        )
        assert response.url == "/posts/new"

    def test_login_ignores_external_next(self, client, user):
        response = client.post(
            "/login",
            {"username": "alice", "password": "pw1", "next": "https://evil.example/"},
        )
        assert response.url == "/posts"

    def test_logout(self, auth_client):
        response = auth_client.get("/logout")

        assert response.status_code == 302
        assert response.url == "/login"
        assert "_auth_user_id" not in auth_client.session


class TestPostList:
    """Listing posts."""

    def test_requires_login(self, client, db):
        """Test anonymous users are redirected to login."""
        response = client.get("/posts")
        assert response.status_code == 302
        assert response.url.startswith("/login")

    def test_lists_posts_newest_first(self, auth_client, user):
        first = Post.objects.create_post(author=user, title="First")
        second = Post.objects.create_post(author=user, title="Second")

        response = auth_client.get("/posts")

        assert response.status_code == 200
        assert list(response.context["posts"]) == [second, first]
        assert b"First" in response.content
        assert b"Second" in response.content

    def test_shows_comment_authors_and_likes(self, auth_client, post, user, other_user):
        post.add_comment(other_user, "nice shot")
        post.toggle_like(user)

        response = auth_client.get("/posts")

        assert b"bob" in response.content
        assert b"nice shot" in response.content
        assert b"1 like" in response.content
        assert post.pk in response.context["liked_post_ids"]


class TestPostCreate:
    """Creating posts."""

    def test_new_post_form(self, auth_client):
        response = auth_client.get("/posts/new")
        assert response.status_code == 200
        assert b'name="hash"' in response.content

    def test_new_post_form_requires_login(self, client, db):
        response = client.get("/posts/new")
        assert response.status_code == 302
        assert response.url.startswith("/login")

    def test_create_without_image(self, auth_client, user):
        response = auth_client.post(
            "/posts",
            {"title": "Plain", "caption": "no picture", "hash": "#text"},
        )

        assert response.status_code == 302
        assert response.url == "/posts"
        post = Post.objects.get()
        assert post.author == user
        assert post.caption == "no picture"
        assert post.hashtag == "#text"
        assert post.image == ""

    def test_create_with_image(self, auth_client, image_file):
        """Test the image goes to storage and only its reference is saved."""
        response = auth_client.post(
            "/posts",
            {"title": "Photo", "caption": "", "hash": "", "image": image_file},
        )

        assert response.status_code == 302
        post = Post.objects.get()
        assert post.image.startswith("/uploads/")
        assert post.image.endswith(".png")
        name = post.image[len("/uploads/"):]
        assert (Path(blog_settings.UPLOAD_DIR) / name).exists()

    def test_create_rejects_non_image(self, auth_client):
        bogus = SimpleUploadedFile("notes.png", b"not an image", content_type="image/png")

        response = auth_client.post("/posts", {"title": "Bad", "image": bogus})

        assert response.url == "/posts/new"
        assert flashed(response)
        assert not Post.objects.exists()

    def test_create_requires_title(self, auth_client):
        response = auth_client.post("/posts", {"caption": "untitled"})

        assert response.url == "/posts/new"
        assert not Post.objects.exists()

    def test_create_storage_failure(self, auth_client, image_file):
        """Test a failed upload does not create the post."""
        storage = mock.Mock()
        storage.save.side_effect = MediaUploadError("disk full")
        with mock.patch("snapblog.views.get_media_storage", return_value=storage):
            response = auth_client.post("/posts", {"title": "Photo", "image": image_file})

        assert response.url == "/posts/new"
        assert "Image upload failed." in flashed(response)
        assert not Post.objects.exists()

    def test_create_database_error(self, auth_client, caplog):
        """Test a failing insert is logged and answered with 500."""
        with mock.patch("snapblog.models.posts.PostManager.create_post", side_effect=DatabaseError("down")):
            response = auth_client.post("/posts", {"title": "Lost"})

        assert response.status_code == 500
        assert response.content == b"Create failed"
        assert "Create error for post by alice" in caplog.text

    def test_create_requires_login(self, client, db):
        response = client.post("/posts", {"title": "Sneaky"})
        assert response.status_code == 302
        assert not Post.objects.exists()


class TestLikeToggle:
    """Liking and unliking."""

    def test_like_then_unlike(self, other_client, post, other_user):
        """Test two toggles by the same user restore the like set."""
        response = other_client.post(f"/posts/{post.pk}/like")
        assert response.status_code == 302
        assert response.url == "/posts"
        assert list(post.likes.all()) == [other_user]

        other_client.post(f"/posts/{post.pk}/like")
        assert list(post.likes.all()) == []

    def test_like_missing_post(self, auth_client):
        response = auth_client.post("/posts/9999/like")
        assert response.status_code == 404

    def test_like_requires_login(self, client, post):
        response = client.post(f"/posts/{post.pk}/like")
        assert response.status_code == 302
        assert post.like_set.count() == 0

    def test_like_database_error(self, auth_client, post):
        with mock.patch.object(Post, "toggle_like", side_effect=DatabaseError("boom")):
            response = auth_client.post(f"/posts/{post.pk}/like")

        assert response.status_code == 500
        assert response.content == b"Like failed"


class TestComments:
    """Adding comments."""

    def test_add_comment(self, other_client, post, other_user):
        response = other_client.post(f"/posts/{post.pk}/comments", {"content": "Lovely"})

        assert response.status_code == 302
        assert response.url == "/posts"
        comment = Comment.objects.get()
        assert comment.author == other_user
        assert comment.post == post
        assert comment.content == "Lovely"

    def test_empty_comment_rejected(self, auth_client, post):
        response = auth_client.post(f"/posts/{post.pk}/comments", {"content": "   "})

        assert response.url == "/posts"
        assert "Comment cannot be empty." in flashed(response)
        assert not Comment.objects.exists()

    def test_comment_missing_post(self, auth_client):
        response = auth_client.post("/posts/9999/comments", {"content": "hello?"})
        assert response.status_code == 404
        assert not Comment.objects.exists()

    def test_comment_database_error(self, auth_client, post):
        with mock.patch.object(Post, "add_comment", side_effect=DatabaseError("boom")):
            response = auth_client.post(f"/posts/{post.pk}/comments", {"content": "hi"})

        assert response.status_code == 500
        assert response.content == b"Comment failed"


class TestPostDelete:
    """Deleting posts."""

    def test_author_deletes(self, auth_client, post):
        response = auth_client.delete(f"/posts/{post.pk}")

        assert response.status_code == 302
        assert response.url == "/posts"
        assert not Post.objects.filter(pk=post.pk).exists()

    def test_delete_via_method_override(self, auth_client, post):
        """Test HTML forms can delete with a _method field."""
        response = auth_client.post(f"/posts/{post.pk}", {"_method": "DELETE"})

        assert response.status_code == 302
        assert not Post.objects.filter(pk=post.pk).exists()

    def test_non_author_forbidden(self, other_client, post):
        """Test a non-author gets 403 and the post stays listed."""
        response = other_client.delete(f"/posts/{post.pk}")

        assert response.status_code == 403
        assert Post.objects.filter(pk=post.pk).exists()
        listing = other_client.get("/posts")
        assert post in listing.context["posts"]

    def test_delete_missing_post(self, auth_client):
        response = auth_client.delete("/posts/9999")
        assert response.status_code == 404

    def test_delete_requires_login(self, client, post):
        response = client.delete(f"/posts/{post.pk}")
        assert response.status_code == 302
        assert Post.objects.filter(pk=post.pk).exists()

    def test_plain_post_not_allowed(self, auth_client, post):
        response = auth_client.post(f"/posts/{post.pk}")
        assert response.status_code == 405
        assert Post.objects.filter(pk=post.pk).exists()


class TestCsrfProtectedForms:
    """The list page forms submit with CSRF checks enforced."""

    @pytest.fixture
    def csrf_client(self, user):
        client = Client(enforce_csrf_checks=True)
        client.force_login(user)
        return client

    def form_token(self, client):
        response = client.get("/posts")
        match = re.search(rb'name="csrfmiddlewaretoken" value="([^"]+)"', response.content)
        assert match is not None
        return match.group(1).decode()

    def test_delete_form(self, csrf_client, post):
        token = self.form_token(csrf_client)
        response = csrf_client.post(
            f"/posts/{post.pk}", {"csrfmiddlewaretoken": token, "_method": "DELETE"}
        )

        assert response.status_code == 302
        assert not Post.objects.filter(pk=post.pk).exists()

    def test_like_form(self, csrf_client, post, user):
        token = self.form_token(csrf_client)
        response = csrf_client.post(f"/posts/{post.pk}/like", {"csrfmiddlewaretoken": token})

        assert response.status_code == 302
        assert post.is_liked_by(user)

    def test_comment_form(self, csrf_client, post):
        token = self.form_token(csrf_client)
        response = csrf_client.post(
            f"/posts/{post.pk}/comments",
            {"csrfmiddlewaretoken": token, "content": "Checked"},
        )

        assert response.status_code == 302
        assert [c.content for c in post.comments.all()] == ["Checked"]

    def test_delete_without_token_rejected(self, csrf_client, post):
        response = csrf_client.post(f"/posts/{post.pk}", {"_method": "DELETE"})

        assert response.status_code == 403
        assert Post.objects.filter(pk=post.pk).exists()


class TestAdmin:
    """Admin registration."""

    @pytest.mark.parametrize("path", ["/admin/snapblog/post/", "/admin/snapblog/comment/", "/admin/snapblog/like/"])
    def test_changelists_load(self, admin_client, post, user, path):
        post.add_comment(user, "admin view")
        post.toggle_like(user)
        response = admin_client.get(path)
        assert response.status_code == 200
