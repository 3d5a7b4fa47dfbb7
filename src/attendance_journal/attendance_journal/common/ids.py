from __future__ import annotations

import uuid


def new_id() -> str:
    """Fresh random identifier for users, profiles and sessions."""
    return str(uuid.uuid4())
