"""Server core: settings, constants and credential handling."""
