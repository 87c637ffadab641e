"""Store access: connections, schema and error categorization."""
