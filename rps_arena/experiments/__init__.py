"""Command-line orchestration of seeded arena batches."""
