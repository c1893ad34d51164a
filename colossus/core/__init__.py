"""Settings, logging setup and grade normalisation."""
