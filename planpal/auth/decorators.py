"""Decorators for the auth blueprint."""

from functools import wraps

from flask_login import current_user

from planpal.errors import ForbiddenError, UnauthorizedError


def login_required(f=None, self_arg=None):
    """Reject the request unless the bearer credential resolved to a user.

    Usage:
    @login_required
    def protected_view():
        ...

    @login_required(self_arg="user_id")
    def own_account_view(user_id):
        ...
    """

    def decorator(func):
        @wraps(func)
        def decorated_function(*args, **kwargs):
            if not current_user.is_authenticated:
                raise UnauthorizedError()
            if self_arg and kwargs.get(self_arg) != current_user.get_id():
                raise ForbiddenError("You can only do that for your own account.")
            return func(*args, **kwargs)

        return decorated_function

    if f:
        return decorator(f)
    return decorator


def acting_user_id(claimed_id=None):
    """Return the caller's id, rejecting a body that names someone else."""
    uid = current_user.get_id()
    if claimed_id and claimed_id != uid:
        raise ForbiddenError("You cannot act on behalf of another user.")
    return uid
