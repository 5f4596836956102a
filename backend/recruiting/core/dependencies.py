"""
Dependency injection utilities.
"""
from functools import wraps
from typing import Optional
from django.contrib.auth import get_user_model
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken
from recruiting.core.errors import AuthenticationError, AuthorizationError

User = get_user_model()


def get_current_user(request) -> Optional[User]:
    """
    Get current authenticated user from request.
    Supports both JWT and session authentication.
    """
    # Try JWT authentication first
    jwt_auth = JWTAuthentication()
    try:
        validated_token = jwt_auth.get_validated_token(jwt_auth.get_raw_token(jwt_auth.get_header(request)))
        user = jwt_auth.get_user(validated_token)
        return user
    except (InvalidToken, AttributeError, TypeError):
        pass

    # Fall back to session authentication
    if hasattr(request, 'user') and request.user.is_authenticated:
        return request.user

    return None


def get_onboarded_coach(request):
    """
    Resolve the coach profile of the caller.

    Raises:
        AuthenticationError: no authenticated user
        AuthorizationError: user is not a coach, or has not finished school association
    """
    user = get_current_user(request)
    if not user:
        raise AuthenticationError()

    coach = getattr(user, 'coach', None)
    if coach is None:
        raise AuthorizationError("Coach account required")
    if not coach.is_onboarded:
        raise AuthorizationError("Complete coach onboarding before using talent search")
    return coach


def get_admin_user(request):
    """
    Resolve the caller and require staff access.
    """
    user = get_current_user(request)
    if not user:
        raise AuthenticationError()
    if not user.is_staff:
        raise AuthorizationError("Admin access required")
    return user


def onboarded_coach_required(view):
    """Attach ``request.coach`` or fail with 401/403."""
    @wraps(view)
    def wrapper(request, *args, **kwargs):
        request.coach = get_onboarded_coach(request)
        return view(request, *args, **kwargs)
    return wrapper


def admin_required(view):
    """Attach ``request.admin_user`` or fail with 401/403."""
    @wraps(view)
    def wrapper(request, *args, **kwargs):
        request.admin_user = get_admin_user(request)
        return view(request, *args, **kwargs)
    return wrapper
