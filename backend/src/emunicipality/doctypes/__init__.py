"""Document type catalog: routes, schemas and handlers."""
