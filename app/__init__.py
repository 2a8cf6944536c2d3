"""Report template service for multi-tenant workspaces."""
