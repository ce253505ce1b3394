from blog_api.services.auth import AuthService

__all__ = ["AuthService"]
