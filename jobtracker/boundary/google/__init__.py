"""Google OAuth and Gmail API clients."""

from jobtracker.boundary.google.gmail_client import GmailClient
from jobtracker.boundary.google.oauth_client import GoogleOAuthClient, OAuthTokens

__all__ = ["GmailClient", "GoogleOAuthClient", "OAuthTokens"]
