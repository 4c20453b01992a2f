"""Service layer: content access, test-session pipeline and bookkeeping."""
