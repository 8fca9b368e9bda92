"""External integrations: attachment storage and outbound email."""
