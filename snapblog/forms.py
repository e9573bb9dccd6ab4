"""
Forms for snapblog.
"""
from django import forms
from django.contrib.auth import authenticate, get_user_model
from django.core.exceptions import ValidationError

from .conf import blog_settings

User = get_user_model()


# ------------------------
# Signup Form
# ------------------------
class SignupForm(forms.Form):
    username = forms.CharField(max_length=150)
    password = forms.CharField(widget=forms.PasswordInput)

    def clean_username(self):
        username = self.cleaned_data["username"]
        if User.objects.filter(username=username).exists():
            raise ValidationError("Username already exists.", code="duplicate_username")
        return username

    def save(self):
        return User.objects.create_user(
            username=self.cleaned_data["username"],
            password=self.cleaned_data["password"],
        )


# ------------------------
# Login Form
# ------------------------
class LoginForm(forms.Form):
    username = forms.CharField(max_length=150)
    password = forms.CharField(widget=forms.PasswordInput)

    def __init__(self, *args, request=None, **kwargs):
        self.request = request
        self.user = None
        super().__init__(*args, **kwargs)

    def clean(self):
        cleaned = super().clean()
        username = cleaned.get("username")
        password = cleaned.get("password")

        if username and password:
            self.user = authenticate(self.request, username=username, password=password)
            if self.user is None:
                raise ValidationError("Invalid credentials", code="invalid_credentials")
        return cleaned


# ------------------------
# Post Form
# ------------------------
class PostForm(forms.Form):
    title = forms.CharField(max_length=blog_settings.TITLE_MAX_LENGTH)
    caption = forms.CharField(widget=forms.Textarea, required=False)
    hash = forms.CharField(max_length=255, required=False, label="Hashtags")
    image = forms.ImageField(required=False)

    def clean_image(self):
        image = self.cleaned_data.get("image")
        if not image:
            return None

        content_type = getattr(image, "content_type", "")
        if content_type not in blog_settings.ALLOWED_IMAGE_TYPES:
            raise ValidationError(f"Unsupported image type: {content_type or 'unknown'}.")
        if image.size > blog_settings.max_upload_bytes:
            raise ValidationError(
                f"Image exceeds {blog_settings.MEDIA_MAX_SIZE_MB}MB limit."
            )
        return image


# ------------------------
# Comment Form
# ------------------------
class CommentForm(forms.Form):
    content = forms.CharField(
        widget=forms.Textarea,
        max_length=blog_settings.COMMENT_MAX_LENGTH,
        error_messages={"required": "Comment cannot be empty."},
    )
