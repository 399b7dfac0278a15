"""Cross-context infrastructure: settings, database, errors and logging."""
