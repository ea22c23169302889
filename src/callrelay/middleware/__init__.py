"""HTTP middleware for callrelay."""
