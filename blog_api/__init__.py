"""Blogging API package. The ASGI application lives in ``blog_api.main``."""
