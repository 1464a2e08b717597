from __future__ import annotations

from functools import wraps
from typing import TYPE_CHECKING

from flask import g, request

from ..members.model import Member
from .tokens import bearer_token

if TYPE_CHECKING:
    from ..container import Container


def actor_required(container: "Container"):
    """Build a decorator that resolves the bearer token to a registered Member.

    The member is stored on ``flask.g.actor``; failures raise the usual domain
    errors so the surrounding error handler turns them into 401/403 responses.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            principal = container.tokens.verify(bearer_token(request.headers.get("Authorization")))
            g.actor = container.identity.resolve(principal)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def current_actor() -> Member:
    return g.actor
