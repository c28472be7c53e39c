"""Year-based deduction table configuration."""
