"""HTTP API layer for usersapi."""
