"""
snapblog - A small server-rendered photo blog for Django.

Features:
- Username/password signup and login with flashed errors
- Posts with title, caption, hashtag and an optional image
- Pluggable image storage (local disk or Cloudinary)
- Comments and toggle-style likes
- Author-only post deletion
"""

__version__ = "0.1.0"
