"""usersapi: CRUD users backend with bearer-token authentication."""

__version__ = "0.1.0"
