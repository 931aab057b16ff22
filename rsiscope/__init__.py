"""rsiscope: RSI with EMA/WMA overlays for plotting."""
