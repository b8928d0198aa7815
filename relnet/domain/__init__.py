"""relnet domain services - reconciliation, visibility and paths."""
