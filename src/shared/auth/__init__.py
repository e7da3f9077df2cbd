from src.shared.auth.supabase_auth import (
    AuthError,
    Session,
    SessionProvider,
    SupabaseAuth,
    SupabaseAuthSettings,
)

__all__ = [
    "AuthError",
    "Session",
    "SessionProvider",
    "SupabaseAuth",
    "SupabaseAuthSettings",
]
