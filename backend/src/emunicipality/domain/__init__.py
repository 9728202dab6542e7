"""Domain enums and rules shared by routers, services and models."""
