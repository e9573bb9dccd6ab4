"""
URL configuration for snapblog.

Include in your project urls.py:

    path('', include('snapblog.urls')),
"""
from django.urls import path

from . import views

app_name = "snapblog"

urlpatterns = [
    path("", views.IndexView.as_view(), name="index"),

    # Accounts
    path("signup", views.SignupView.as_view(), name="signup"),
    path("login", views.LoginView.as_view(), name="login"),
    path("logout", views.LogoutView.as_view(), name="logout"),

    # Posts
    path("posts", views.PostListView.as_view(), name="post_list"),
    path("posts/new", views.PostCreateView.as_view(), name="post_create"),
    path("posts/<int:pk>", views.PostDeleteView.as_view(), name="post_delete"),

    # Interactions
    path("posts/<int:pk>/like", views.LikeToggleView.as_view(), name="like_toggle"),
    path("posts/<int:pk>/comments", views.CommentCreateView.as_view(), name="comment_create"),
]
