# API Routes Module
from app.api.routes import (
    auth,
    plans,
    subscriptions,
    teams,
)

__all__ = [
    "auth",
    "plans",
    "subscriptions",
    "teams",
]
