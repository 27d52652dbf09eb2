"""Base store interface — Abstract classes for search store transports."""
