"""Pure data rules: key paths, conversions, and the error taxonomy."""
