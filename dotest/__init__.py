"""Do-Test study and test-prep service."""
