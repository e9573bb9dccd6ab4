"""
Views for snapblog.
"""
import logging

from django.contrib import messages
from django.contrib.auth import login, logout
from django.contrib.auth.mixins import LoginRequiredMixin
from django.db import DatabaseError, IntegrityError, transaction
from django.http import HttpResponseServerError
from django.shortcuts import get_object_or_404, redirect, render
from django.utils.http import url_has_allowed_host_and_scheme
from django.views import View
from django.views.generic import FormView, ListView, RedirectView

from .forms import CommentForm, LoginForm, PostForm, SignupForm
from .models import Like, Post
from .storage import MediaUploadError, get_media_storage

logger = logging.getLogger(__name__)


def flash_form_errors(request, form):
    """Queue every form error as a one-time error message."""
    for errors in form.errors.values():
        for error in errors:
            messages.error(request, error)


class IndexView(RedirectView):
    pattern_name = "snapblog:post_list"


# -------------------
# Authentication
# -------------------
class SignupView(View):
    """Create an account and log straight into it."""

    template_name = "snapblog/signup.html"

    def get(self, request):
        return render(request, self.template_name)

    def post(self, request):
        form = SignupForm(request.POST)
        if not form.is_valid():
            flash_form_errors(request, form)
            return redirect("snapblog:signup")

        try:
            with transaction.atomic():
                user = form.save()
        except IntegrityError:
            # Lost a race with a concurrent signup for the same name
            messages.error(request, "Username already exists.")
            return redirect("snapblog:signup")
        except DatabaseError:
            logger.exception("Signup failed for %s", form.cleaned_data["username"])
            messages.error(request, "Signup failed.")
            return redirect("snapblog:signup")

        login(request, user)
        logger.info("New user %s signed up", user.username)
        return redirect("snapblog:post_list")


class LoginView(View):
    """Authenticate with username and password."""

    template_name = "snapblog/login.html"

    def get(self, request):
        return render(request, self.template_name, {"next": request.GET.get("next", "")})

    def post(self, request):
        form = LoginForm(request.POST, request=request)
        if not form.is_valid():
            logger.info("Failed login for %r", request.POST.get("username", ""))
            flash_form_errors(request, form)
            return redirect("snapblog:login")

        login(request, form.user)
        logger.info("User %s logged in", form.user.username)

        next_url = request.POST.get("next")
        if next_url and url_has_allowed_host_and_scheme(
            next_url,
            allowed_hosts={request.get_host()},
            require_https=request.is_secure(),
        ):
            return redirect(next_url)
        return redirect("snapblog:post_list")


class LogoutView(View):
    """End the session and go back to the login page."""

    def get(self, request):
        if request.user.is_authenticated:
            logger.info("User %s logged out", request.user.username)
        logout(request)
        return redirect("snapblog:login")


# -------------------
# Posts
# -------------------
class PostListView(LoginRequiredMixin, ListView):
    """List every post, newest first. POST creates a new one."""

    template_name = "snapblog/post_list.html"
    context_object_name = "posts"

    def get_queryset(self):
        return Post.objects.for_listing()

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["liked_post_ids"] = set(
            Like.objects.filter(user=self.request.user).values_list("post_id", flat=True)
        )
        return context

    def post(self, request, *args, **kwargs):
        return PostCreateView.as_view()(request, *args, **kwargs)


class PostCreateView(LoginRequiredMixin, FormView):
    """Show the new-post form and create posts from it."""

    template_name = "snapblog/post_form.html"
    form_class = PostForm

    def form_valid(self, form):
        image_ref = None
        image = form.cleaned_data.get("image")
        if image:
            try:
                image_ref = get_media_storage().save(image, user=self.request.user)
            except MediaUploadError:
                messages.error(self.request, "Image upload failed.")
                return redirect("snapblog:post_create")

        try:
            Post.objects.create_post(
                author=self.request.user,
                title=form.cleaned_data["title"],
                caption=form.cleaned_data["caption"],
                hashtag=form.cleaned_data["hash"],
                image=image_ref,
            )
        except DatabaseError:
            logger.exception(
                "Create error for post by %s (stored image left at %r)",
                self.request.user.username,
                image_ref,
            )
            return HttpResponseServerError("Create failed")
        return redirect("snapblog:post_list")

    def form_invalid(self, form):
        flash_form_errors(self.request, form)
        return redirect("snapblog:post_create")


class PostDeleteView(LoginRequiredMixin, View):
    """Delete a post. Only its author may do so."""

    def delete(self, request, pk):
        post = get_object_or_404(Post, pk=pk)

        try:
            post.delete_by(request.user)
        except DatabaseError:
            logger.exception("Delete error for post %s", pk)
            return HttpResponseServerError("Delete failed")

        return redirect("snapblog:post_list")


# -------------------
# Interactions
# -------------------
class LikeToggleView(LoginRequiredMixin, View):
    """Toggle the current user's like on a post."""

    def post(self, request, pk):
        post = get_object_or_404(Post, pk=pk)

        try:
            post.toggle_like(request.user)
        except DatabaseError:
            logger.exception("Like error for post %s", pk)
            return HttpResponseServerError("Like failed")

        return redirect("snapblog:post_list")


class CommentCreateView(LoginRequiredMixin, View):
    """Add a comment to a post."""

    def post(self, request, pk):
        post = get_object_or_404(Post, pk=pk)

        form = CommentForm(request.POST)
        if not form.is_valid():
            flash_form_errors(request, form)
            return redirect("snapblog:post_list")

        try:
            post.add_comment(request.user, form.cleaned_data["content"])
        except DatabaseError:
            logger.exception("Comment error for post %s", pk)
            return HttpResponseServerError("Comment failed")

        return redirect("snapblog:post_list")
