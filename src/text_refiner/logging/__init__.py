"""Per-run usage records (tokens, cost, outcome)."""
