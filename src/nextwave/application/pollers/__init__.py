"""Background pollers."""

from nextwave.application.pollers.refresh_poller import RefreshPoller

__all__ = ["RefreshPoller"]
