from backend.app.models.user import User

__all__ = ["User"]
