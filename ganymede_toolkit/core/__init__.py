"""Core, UI-independent layers: models, parser adapter, engine and services."""
