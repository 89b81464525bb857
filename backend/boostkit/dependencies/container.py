"""FastAPI dependency that builds one wired container per request."""

from fastapi import Request

from boostkit.bootstrap import Bootstrap
from boostkit.container import Container
from boostkit.database import get_session_factory


def get_container(request: Request) -> Container:
    """Boot a fresh container for *request*.

    The session factory and addons come from ``app.state`` (set by
    :func:`boostkit.main.create_app`) so tests can point the app at their
    own database without touching module globals.
    """
    state = request.app.state
    session_factory = getattr(state, "session_factory", None) or get_session_factory()
    addons = getattr(state, "addons", ())
    return Bootstrap(session_factory=session_factory, addons=addons).init()
