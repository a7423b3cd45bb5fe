"""Application services composing features with platform adapters."""
