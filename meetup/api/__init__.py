"""HTTP boundary for the session engine."""
