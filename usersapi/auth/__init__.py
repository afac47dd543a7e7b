"""Bearer-token authentication for usersapi."""
