"""Database engine and session management."""

from keyset_relay.infra.database.session import create_engine, create_session_factory, session_scope

__all__ = ["create_engine", "create_session_factory", "session_scope"]
