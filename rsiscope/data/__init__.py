"""Price feed adapters producing raw input series."""
