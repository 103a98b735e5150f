"""ID and value generators."""

import uuid


def generate_uuid() -> str:
    """Generate a random UUID4 string (entity uuid when the caller supplies none)."""
    return str(uuid.uuid4())
