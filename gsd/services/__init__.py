"""Use cases. Services own the transaction: they commit or roll back."""
