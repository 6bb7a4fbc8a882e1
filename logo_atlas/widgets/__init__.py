"""Qt widgets for the Logo Atlas window."""
