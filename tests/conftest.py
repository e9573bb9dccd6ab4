"""
Shared fixtures for snapblog tests.
"""
import io

import pytest
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image

from snapblog.models import Post

User = get_user_model()


@pytest.fixture
def user(db):
    """Create a test user."""
    return User.objects.create_user(username="alice", password="pw1")


@pytest.fixture
def other_user(db):
    """Create a second user."""
    return User.objects.create_user(username="bob", password="pw2")


@pytest.fixture
def post(db, user):
    """Create a test post owned by ``user``."""
    return Post.objects.create_post(
        author=user,
        title="Test Post",
        caption="A caption",
        hashtag="#test",
    )


@pytest.fixture
def auth_client(client, user):
    """Client logged in as ``user``."""
    client.force_login(user)
    return client


@pytest.fixture
def other_client(client, other_user):
    """Client logged in as ``other_user``."""
    client.force_login(other_user)
    return client


@pytest.fixture
def image_file():
    """A small valid PNG upload."""
    buf = io.BytesIO()
    Image.new("RGB", (4, 4), color=(200, 40, 40)).save(buf, format="PNG")
    return SimpleUploadedFile("photo.png", buf.getvalue(), content_type="image/png")
