"""Document requests: routes, schemas and lifecycle handlers."""
