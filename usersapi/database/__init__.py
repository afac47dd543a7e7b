"""Database engine, tables and repositories for usersapi."""
