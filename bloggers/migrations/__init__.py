"""SQL migrations, executed in filename order at startup."""
