"""Query helpers over the ORM models. They flush but never commit."""
