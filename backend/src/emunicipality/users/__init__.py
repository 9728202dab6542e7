"""User management: routes, schemas and handlers."""
