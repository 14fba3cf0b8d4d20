from .bearer_auth import get_current_user_id, resolve_user_id

__all__ = ["get_current_user_id", "resolve_user_id"]
