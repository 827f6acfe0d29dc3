"""Field-service route optimization engine and API."""
