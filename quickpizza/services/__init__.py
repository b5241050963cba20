"""Service Layer: the catalog store (transactional recorder + query service)."""
