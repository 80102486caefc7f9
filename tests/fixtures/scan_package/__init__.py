"""Package of sample endpoints for module-scan tests."""
