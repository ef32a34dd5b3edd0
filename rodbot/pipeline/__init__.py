"""Event loading, templating, step execution and run orchestration."""
