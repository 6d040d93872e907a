"""
Boundary layer for external system integrations.

Handles all interactions with external systems (database, object storage,
Google OAuth and the Gmail API). Provides adapters and clients for
infrastructure dependencies.
"""
