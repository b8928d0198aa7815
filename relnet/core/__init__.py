"""relnet core - models, errors and the event bus."""
