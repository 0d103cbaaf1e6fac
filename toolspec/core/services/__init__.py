"""Services — the resolution pipeline stages."""
