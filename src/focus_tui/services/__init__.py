"""Services: persistence, configuration and notifications."""
