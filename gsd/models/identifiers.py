"""Primary key generation shared by every model."""
import uuid


def new_id() -> str:
    return str(uuid.uuid4())
