"""Business logic layer. Services return ``ServiceResult`` and own transactions."""
